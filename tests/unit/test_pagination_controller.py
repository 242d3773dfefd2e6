from lms_admin_console.app.ui.pagination import PaginationController


def _controller(**overrides) -> PaginationController:
    raw = {"page": 1, "limit": 50, "total": 0, "totalPages": 0, "hasNext": False, "hasPrev": False, **overrides}
    return PaginationController.from_state(raw)


def test_showing_label_for_middle_page() -> None:
    controller = _controller(page=2, total=120, totalPages=3, hasNext=True, hasPrev=True)

    assert controller.showing_label() == "Showing 51 to 100 of 120"


def test_showing_label_for_last_partial_page() -> None:
    controller = _controller(page=3, total=120, totalPages=3, hasPrev=True)

    assert controller.showing_label() == "Showing 101 to 120 of 120"


def test_showing_label_without_results() -> None:
    assert _controller().showing_label() == "Showing 0 to 0 of 0"


def test_first_page_disables_prev_controls() -> None:
    controller = _controller(page=1, total=120, totalPages=3, hasNext=True)

    assert controller.first_page() is None
    assert controller.prev_page() is None
    assert controller.next_page() == 2
    assert controller.last_page_target() == 3
    assert controller.controls_line().startswith("(f=first) (p=prev)")


def test_last_page_disables_next_even_if_backend_reports_more() -> None:
    controller = _controller(page=3, total=120, totalPages=3, hasNext=True, hasPrev=True)

    assert controller.next_page() is None
    assert controller.last_page_target() is None
    assert controller.prev_page() == 2
    assert "(n=next)" in controller.controls_line()


def test_goto_page_is_clamped() -> None:
    controller = _controller(page=1, total=120, totalPages=3, hasNext=True)

    assert controller.goto_page(0) == 1
    assert controller.goto_page(9) == 3
