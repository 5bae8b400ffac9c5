"""History tracker exceptions."""


class HistoryUpdateError(Exception):
    """Recording a play failed. Always handled inside the tracker."""

    def __init__(self, user_key: str, detail: str) -> None:
        self.user_key = user_key
        self.detail = detail
        super().__init__(f"History update failed for {user_key}: {detail}")
