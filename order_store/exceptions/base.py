from typing import Any, Dict, Optional


class OrderStoreError(Exception):
    """Root of every error raised by the order store itself.

    botocore errors are not wrapped in this hierarchy; only failures detected
    by the store (bad keys, bad records, cancelled transactions, setup
    problems) are.

    Attributes:
        message: What went wrong
        original_error: Lower-level exception this one was raised from, if any
        context: Identifiers and values that help locate the failure
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context: Dict[str, Any] = dict(context or {})

    def with_context(self, **values: Any) -> 'OrderStoreError':
        """Add context entries, skipping None values. Returns self."""
        self.context.update({name: value for name, value in values.items() if value is not None})
        return self

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{name}={value!r}" for name, value in self.context.items())
        return f"{self.message} [{details}]"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.message!r}, "
            f"original_error={self.original_error!r}, context={self.context!r})"
        )
