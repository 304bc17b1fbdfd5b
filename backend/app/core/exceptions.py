"""
Fachliche Fehlerklassen

Services werfen diese Fehler, die API-Schicht übersetzt sie in HTTP-Antworten.
"""


class AllocationError(ValueError):
    """Ungültige Sorten-/Lampenzuteilung für eine Charge"""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code


class BatchValidationError(ValueError):
    """Pflichtfelder oder Werte einer Charge sind ungültig"""


class RoomInUseError(ValueError):
    """Raum hat noch laufende oder geplante Chargen"""


class NotFoundError(LookupError):
    """Datensatz existiert nicht"""


class PersistenceError(RuntimeError):
    """Schreib- oder Lesefehler gegen die Datenbank"""
