"""Framework-neutral outcomes returned by the request handlers."""

from dataclasses import dataclass, field
from typing import Any

from petclinic.validation import FormErrors


@dataclass
class ViewResult:
    """
    Render ``template`` with ``context``.

    Attributes:
        template: Template path relative to the templates folder.
        context: Template variables.
        errors: Field errors to annotate the form with, if any.
        status: HTTP status of the rendered response.
        message: Optional flash message shown on this page.
        discard: Unsaved changes to loaded aggregates must be dropped
            once the page is rendered.
    """

    template: str
    context: dict[str, Any] = field(default_factory=dict)
    errors: FormErrors | None = None
    status: int = 200
    message: str | None = None
    discard: bool = False

    @property
    def failed(self) -> bool:
        return self.errors is not None and self.errors.has_errors()


@dataclass
class RedirectResult:
    """Redirect to ``location`` with an optional flash message for the next page."""

    location: str
    message: str | None = None
