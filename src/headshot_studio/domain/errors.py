"""Error taxonomy for the headshot workflow."""


class HeadshotError(Exception):
    """Base class for errors that carry a user-readable message."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(HeadshotError):
    """User input was rejected before any processing happened."""

    default_message = "The input is not valid."


class InvalidStateError(HeadshotError):
    """The operation is not available in the current state."""

    default_message = "This action is not available right now."


class GenerationError(HeadshotError):
    """Base class for image generation failures."""

    default_message = "Something went wrong during generation."


class ConfigurationError(GenerationError):
    """No credential is configured for the generation service."""

    default_message = "API key is missing. Please set GEMINI_API_KEY."


class EmptyResponseError(GenerationError):
    """The generation service returned nothing usable."""

    default_message = "No content generated."


class ModelDeclinedError(GenerationError):
    """The model answered without producing an image."""

    default_message = "The model declined to produce an image."


class TextOnlyResponseError(ModelDeclinedError):
    """The model returned explanatory text instead of an image."""

    def __init__(self, model_text: str) -> None:
        self.model_text = model_text
        super().__init__(f"Model returned text instead of image: {model_text}")


class TransportError(GenerationError):
    """The remote call failed at the network or API level."""


class LocalProcessingError(HeadshotError):
    """Local background removal failed or is unsupported."""

    default_message = (
        "Failed to remove background. The image could not be processed locally."
    )


class CompositingError(HeadshotError):
    """A processed image could not be decoded for export."""

    default_message = "The edited image could not be decoded for export."
