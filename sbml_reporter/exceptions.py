"""
SBML-Reporter exceptions.
"""


class ReporterError(Exception):
    """Base exception for SBML-Reporter"""
    pass


class ModelReadError(ReporterError):
    """The input model could not be read or converted"""
    def __init__(self, source: str, messages: list[str]):
        self.source = source
        self.messages = messages
        detail = "; ".join(messages[:3]) if messages else "unknown error"
        super().__init__(f"Cannot read model from {source}: {detail}")


class UnresolvedReferenceError(ReporterError):
    """An entity references an identifier that is not part of the model"""
    def __init__(self, entity_id: str, reference: str, kind: str = "species"):
        self.entity_id = entity_id
        self.reference = reference
        self.kind = kind
        super().__init__(
            f"Unresolved reference: '{entity_id}' refers to unknown {kind} '{reference}'"
        )


class MaskingTableError(ReporterError):
    """An escaping table is missing or malformed"""
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Invalid masking table {path}: {message}")
