class ImageWrapperError(Exception):
    """Base exception for Image Wrapper"""
    pass

class UnsupportedSource(ImageWrapperError):
    """Raised when an image session is built from something that is not a path, a Pillow image or a bitmap blob"""
    pass

class InvalidMethod(ImageWrapperError):
    """Raised when the resize method selector is not recognized"""
    pass

class UnresolvedConstraint(ImageWrapperError):
    """Raised when the sizing inputs are insufficient for the chosen resize method"""
    pass

class MissingDestination(ImageWrapperError):
    """Raised when writing an image with no known file name"""
    pass

class EngineError(ImageWrapperError):
    """Raised when Pillow fails to decode, transform or encode an image"""
    pass

class ConfigError(ImageWrapperError):
    """Raised when the configuration file cannot be used"""
    pass
