from typing import Optional


class MisconfigurationException(Exception):
    """Exception used to inform users of misuse with bapimap."""


class BapimapException(Exception):
    """Base class for errors raised while building or applying a mapping.

    Every error carries whatever is known about the offending location so that a failure can be traced back to a
    specific class, field or external parameter without re-running the mapping.
    """

    def __init__(
        self,
        message: str,
        owner: Optional[type] = None,
        field_name: Optional[str] = None,
        parameter_name: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.owner = owner
        self.field_name = field_name
        self.parameter_name = parameter_name

    @property
    def location(self) -> str:
        parts = []
        if self.owner is not None:
            parts.append(getattr(self.owner, "__qualname__", str(self.owner)))
        if self.field_name is not None:
            parts.append(self.field_name)
        loc = ".".join(parts)
        if self.parameter_name is not None:
            loc = f"{loc} ({self.parameter_name})" if loc else self.parameter_name
        return loc

    def fill_location(
        self,
        owner: Optional[type] = None,
        field_name: Optional[str] = None,
        parameter_name: Optional[str] = None,
    ) -> None:
        """Record location details the raising code did not know about, known details are kept."""
        if self.owner is None:
            self.owner = owner
        if self.field_name is None:
            self.field_name = field_name
        if self.parameter_name is None:
            self.parameter_name = parameter_name


class MappingError(BapimapException):
    """Class or field metadata is structurally invalid."""


class FieldNotFoundError(BapimapException):
    """A named field is not declared on the inspected class."""


class FieldAccessError(BapimapException):
    """A declared field could not be read or written."""


class InvalidAssignmentError(BapimapException):
    """An absent (``None``) value was passed to a field setter."""


class InstantiationError(BapimapException):
    """A type could not be constructed through its no-argument constructor."""


class ConversionError(BapimapException):
    """A converter could not transform a value in either direction."""
