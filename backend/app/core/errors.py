"""Error types raised across the conversion pipeline."""


class ConversionError(Exception):
    """Base class for failures while converting a recipe."""


class RecipeFetchError(ConversionError):
    """The recipe source was unreachable or answered with a non-success status."""


class CatalogSearchError(ConversionError):
    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialsError(ConversionError):
    def __init__(self, setting: str):
        super().__init__(f"Missing {setting.upper()} in environment")
        self.setting = setting


class InvalidIngredientError(ValueError):
    """Raised when the parsing core receives something that is not ingredient text."""
