"""Exception hierarchy for code generation."""


class CodegenError(Exception):
    """Base class of every error raised by the code generator."""


class IoError(CodegenError):
    """A file or directory could not be read, created or written."""


class ModelError(CodegenError):
    """The model could not be assembled or holds inconsistent data."""


class InvalidModelError(CodegenError):
    """The model uses a construct that the generator does not accept."""


class UnsupportedShapeError(CodegenError):
    """A shape kind is not supported by a language generator."""

    def __init__(self, shape_id: str, doc: str) -> None:
        super().__init__(f"shape {shape_id} is not supported: {doc}")
        self.shape_id = shape_id
        self.doc = doc


class FormatterError(CodegenError):
    """A source formatter could not run."""


class MissingFileError(CodegenError):
    """A path named in the configuration does not exist."""


class OtherError(CodegenError):
    """Any other failure."""