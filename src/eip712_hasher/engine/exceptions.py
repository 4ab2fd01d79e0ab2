"""
Exception and Error Definitions Module

Defines the exception hierarchy raised while turning an EIP-712 typed data
document into its signing digest. All exceptions inherit from
TypedDataError for unified exception handling.

Exception Hierarchy:
    TypedDataError (root)
    ├── SchemaError
    ├── TypedValueError (also a builtin ValueError)
    ├── EncodingError
    ├── ConfigurationError
    └── SignatureError

Every error is fail-fast: the first schema or value problem aborts the
computation and no partial digest is ever returned.
"""


class TypedDataError(Exception):
    """
    Root exception class for all project-specific exceptions.

    Callers that only need to know "this document cannot be signed" should
    catch this class and reject the operation.
    """
    pass


class SchemaError(TypedDataError):
    """
    Raised when the type table itself is invalid.

    This includes scenarios such as:
    - Malformed type strings (``uint7``, ``bytes33``, ``Person[``)
    - References to types missing from the table
    - Cyclic dependencies between struct types
    - Duplicate member names or redefinition of atomic type names
    - Missing ``EIP712Domain`` declaration
    """
    pass


class TypedValueError(TypedDataError, ValueError):
    """
    Raised when a concrete value does not conform to its declared type.

    This includes scenarios such as:
    - Missing struct members
    - Kind mismatch (string supplied where an integer is declared)
    - Integers out of range for the declared bit width
    - Fixed-size array or ``bytesN`` length mismatch
    - Malformed hex encoding

    Attributes:
        path: Dotted path of the offending field (e.g. ``message.from.wallet``)
    """

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class EncodingError(TypedDataError):
    """
    Raised when an internal encoding invariant is violated.

    Unreachable once schema and value validation pass; treated as a
    programming-contract failure rather than bad user input.
    """
    pass


class ConfigurationError(TypedDataError):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - No signing key passed and ``EVM_PRIVATE_KEY`` not set
    - Malformed private key material
    """
    pass


class SignatureError(TypedDataError):
    """
    Raised when signature components are malformed.
    """
    pass
