"""Render module schemas."""

from pydantic import BaseModel, ConfigDict, Field

from pdfhelper.config import Settings


class RenderOptions(BaseModel):
    """PDF output options, fixed per deployment."""

    model_config = ConfigDict(frozen=True)

    paper_size: str = Field(default="A4", description="Chromium paper format (A4, Letter, ...)")
    margins: dict[str, str] = Field(
        default_factory=lambda: {"top": "10mm", "right": "10mm", "bottom": "10mm", "left": "10mm"},
        description="Margins (top, right, bottom, left in CSS units)",
    )
    print_background: bool = Field(
        default=True,
        description="Include background colors and images",
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "RenderOptions":
        return cls(paper_size=settings.paper_size, margins=settings.margins)

    def to_pdf_kwargs(self) -> dict:
        """Keyword arguments for Playwright's ``page.pdf()``."""
        return {
            "format": self.paper_size,
            "margin": dict(self.margins),
            "print_background": self.print_background,
        }
