class ValidationError(Exception):
    """Exception raised when field or document validation fails.
    NOTE: Messages in these errors should be shareable to the user.
    Document.is_valid() collects these into document.errors instead of raising them. """
    
    def __init__(self, message: str, field_name: str | None = None) -> None:
        self.message = message
        self.field_name = field_name
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.field_name:
            return f"{self.field_name}: {self.message}"
        return self.message
