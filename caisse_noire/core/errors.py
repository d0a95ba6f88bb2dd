"""Domain error types for caisse-noire.

Every error raised by the service layer derives from CaisseNoireError and
carries a human-readable description. The API layer maps each type onto a
stable ErrorKind (see caisse_noire.api.errors).
"""


class CaisseNoireError(Exception):
    """Base exception for all service errors."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(description)


class NotFoundError(CaisseNoireError):
    """Raised when a team, user or sanction does not exist."""

    def __init__(self, description: str = "Not found") -> None:
        super().__init__(description)


class BadReferenceError(CaisseNoireError):
    """Raised when an identifier refers to nothing (team, rule, user).

    Attributes:
        field: Name of the field holding the dangling identifier
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"The key {field} doesn't refer to anything")


class DuplicatedFieldError(CaisseNoireError):
    """Raised when a value that must be unique is already used."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"The field {field} is already used")


class PriceMismatchError(CaisseNoireError):
    """Raised when a sanction's extra info cannot be priced with its rule.

    Attributes:
        rule_name: Name of the associated rule
        rule_kind: Rule kind tag (e.g. "BASIC")
        extra_info: Extra info tag supplied with the sanction (e.g. "NONE")
    """

    def __init__(self, rule_name: str, rule_kind: str, extra_info: str, description: str | None = None) -> None:
        self.rule_name = rule_name
        self.rule_kind = rule_kind
        self.extra_info = extra_info
        super().__init__(
            description
            or (
                f"The rule '{rule_name}' of kind {rule_kind} "
                f"is not compatible with extra info of kind {extra_info}"
            )
        )


class UnsupportedRuleKindError(PriceMismatchError):
    """Raised for rule kinds that exist in the catalog but have no price formula."""

    def __init__(self, rule_name: str, rule_kind: str, extra_info: str) -> None:
        super().__init__(
            rule_name,
            rule_kind,
            extra_info,
            description=f"The rule '{rule_name}' of kind {rule_kind} cannot be priced yet",
        )
