"""Error taxonomy shared by the services and the HTTP layer.

Each error knows the status code the API answers with; the app registers a
single handler that renders ``{"error": message}`` for all of them.
"""
from typing import Any, Dict


class MealStretchError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ClientInputError(MealStretchError):
    """Malformed or missing request input."""
    status_code = 400


class SelectionError(MealStretchError):
    """No meal template survived filtering for the request."""
    status_code = 400

    def __init__(self, budget: float, hint: str = ""):
        self.budget = budget
        self.hint = hint or "Try raising your budget or relaxing allergy/stove constraints."
        super().__init__(f"No meal fits a budget of ${budget:.2f}. {self.hint}")

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "budget": self.budget, "hint": self.hint}


class FeatureNotConfiguredError(MealStretchError):
    """A provider credential is missing or the provider is unreachable."""
    status_code = 503


class ProviderError(MealStretchError):
    """A third-party API failed or answered with a non-success status."""
    status_code = 500


class CatalogError(MealStretchError):
    """Reference data failed validation at load time."""
