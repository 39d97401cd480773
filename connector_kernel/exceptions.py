"""
Typed exception hierarchy for the external object connector.

Every error carries a class-level ``code`` (machine-readable, API-safe) and
stores its context as attributes, so callers catch by type and log or
serialise structured data instead of parsing message strings.

    ConnectorError (base)
    |
    +-- DocumentError
    |   +-- AttributeTypeMismatchError
    |   +-- MalformedDocumentError
    |
    +-- RowError
    |   +-- MissingExternalIdError
    |
    +-- ContactError
        +-- ContactNotFoundError

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Document        | ATTRIBUTE_TYPE_MISMATCH     | Present value cannot be read as the mapped type
                | MALFORMED_DOCUMENT          | Payload is not a JSON object
----------------|-----------------------------|-----------------------------------------
Row             | MISSING_EXTERNAL_ID         | Document lacks the entity's external id
----------------|-----------------------------|-----------------------------------------
Contact         | CONTACT_NOT_FOUND           | No contact matches the candidate identifier

A missing source attribute is NOT an exception. The record mapper reports
it through its diagnostics sink and omits the field.
"""


class ConnectorError(Exception):
    """
    Base exception for all connector errors.

    All subclasses must have a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "CONNECTOR_ERROR"


# Document-related exceptions


class DocumentError(ConnectorError):
    """Base exception for source document errors."""

    code: str = "DOCUMENT_ERROR"


class AttributeTypeMismatchError(DocumentError):
    """
    A present attribute value cannot be read as the requested type.

    Raised by the typed accessors on a looked-up value.  The record mapper
    lets this propagate: a wrong-typed value is a configuration error that
    aborts the record, unlike an absent one.
    """

    code: str = "ATTRIBUTE_TYPE_MISMATCH"

    def __init__(self, attribute: str, expected_type: str, actual_type: str):
        self.attribute = attribute
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(
            f"Attribute {attribute!r} cannot be read as {expected_type}: "
            f"found {actual_type}"
        )


class MalformedDocumentError(DocumentError):
    """Payload could not be parsed into a JSON object."""

    code: str = "MALFORMED_DOCUMENT"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed source document: {reason}")


# Row-related exceptions


class RowError(ConnectorError):
    """Base exception for external object row assembly errors."""

    code: str = "ROW_ERROR"


class MissingExternalIdError(RowError):
    """Document has no value for the entity's external id attribute."""

    code: str = "MISSING_EXTERNAL_ID"

    def __init__(self, entity: str, attribute: str):
        self.entity = entity
        self.attribute = attribute
        super().__init__(
            f"Document for {entity} has no external id at {attribute!r}"
        )


# Contact-related exceptions


class ContactError(ConnectorError):
    """Base exception for contact resolution errors."""

    code: str = "CONTACT_ERROR"


class ContactNotFoundError(ContactError):
    """No contact matched the candidate identifier."""

    code: str = "CONTACT_NOT_FOUND"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No contact found matching identifier: {identifier}")
