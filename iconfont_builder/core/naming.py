"""
Name table values for generated icon fonts.
"""

from dataclasses import dataclass

DEFAULT_VERSION = "1.0"


@dataclass
class FontNaming:
    """Font naming configuration."""

    family: str  # e.g., "iconfont"
    style: str = "Regular"
    postscript_family: str | None = None

    @property
    def full_name(self) -> str:
        """Full font name with family and style."""
        return f"{self.family} {self.style}"

    @property
    def postscript_name(self) -> str:
        """PostScript name (no spaces)."""
        base = self.postscript_family or self.family.replace(" ", "")
        return f"{base}-{self.style.replace(' ', '')}"

    @property
    def unique_id(self) -> str:
        """Unique font identifier."""
        return f"{DEFAULT_VERSION};ICONFONT;{self.postscript_name.replace('-', '')}"

    def as_name_strings(self, version: str = DEFAULT_VERSION) -> dict[str, str]:
        """Name strings in the form FontBuilder.setupNameTable expects."""
        return {
            "familyName": self.family,
            "styleName": self.style,
            "uniqueFontIdentifier": self.unique_id,
            "fullName": self.full_name,
            "psName": self.postscript_name,
            "version": f"Version {version}",
        }
