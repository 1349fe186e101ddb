"""Custom exceptions for Lyrics Romanizer."""

class RomanizerError(Exception):
    """Base exception for Lyrics Romanizer."""
    pass

class ConfigError(RomanizerError):
    """Invalid configuration value."""
    pass

class ValidationError(RomanizerError):
    """Invalid input document or parameters."""
    pass

class AnalyzerUnavailable(RomanizerError):
    """Japanese analyzer is not initialized or failed to initialize."""
    pass

class AnalyzerCallFailed(RomanizerError):
    """Japanese analyzer call raised or timed out."""
    pass

class PresentationNotFound(RomanizerError):
    """Lyrics container is not present in the presentation layer."""
    pass
