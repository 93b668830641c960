class RecipeBrowserError(Exception):
    """Base for failures that end up as a message in place of results."""


class NetworkError(RecipeBrowserError):
    pass


class UpstreamFormatError(RecipeBrowserError):
    pass


class InvalidArgument(RecipeBrowserError, ValueError):
    pass


class NotFound(RecipeBrowserError):
    def __init__(self, recipe_id: str) -> None:
        super().__init__(f"No recipe with id {recipe_id!r}.")
        self.recipe_id = recipe_id


class BatchFetchError(RecipeBrowserError):
    """A concurrent batch failed. ``error`` is the first failure in issue order."""

    def __init__(self, error: RecipeBrowserError) -> None:
        super().__init__(f"Batch fetch failed: {error}")
        self.error = error
