from __future__ import annotations


class ErrorBanner:
    """Dismissible error line shown above a page."""

    def __init__(self) -> None:
        self.payload: dict | None = None

    @property
    def visible(self) -> bool:
        return self.payload is not None

    def set(self, error_payload: dict | str | None) -> None:
        if error_payload is None or error_payload == "":
            self.payload = None
        elif isinstance(error_payload, str):
            self.payload = {"code": "UI_ERROR", "message": error_payload, "trace_id": None, "suggestion": None}
        else:
            self.payload = dict(error_payload)

    def dismiss(self) -> None:
        self.payload = None

    def render(self) -> str | None:
        if self.payload is None:
            return None
        return self.format(self.payload)

    @staticmethod
    def format(error_payload: dict | str) -> str:
        if isinstance(error_payload, str):
            return f"[ERROR] code=UI_VALIDATION message={error_payload} trace_id=n/a"
        trace_id = error_payload.get("trace_id") or "n/a"
        line = f"[ERROR] code={error_payload.get('code')} message={error_payload.get('message')} trace_id={trace_id}"
        if error_payload.get("suggestion"):
            line += f" suggestion={error_payload.get('suggestion')}"
        return line

    @staticmethod
    def show(error_payload: dict | str) -> None:
        print(ErrorBanner.format(error_payload))
