class SetupError(Exception):
    """Exception raised for configuration errors (document declarations, registry, environment)."""
    
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
