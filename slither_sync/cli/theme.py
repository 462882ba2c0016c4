"""CLI theme configuration - all colors in one place.

Colors use Rich markup syntax (e.g., "green", "bold red", "dim italic").
"""


class Theme:
    """Terminal color theme for the slither-sync CLI."""

    # -------------------------------------------------------------------------
    # Status colors
    # -------------------------------------------------------------------------
    SUCCESS = "green"
    ERROR = "red"
    ERROR_BOLD = "bold red"
    INFO = "cyan"
    DIM = "grey62"

    # -------------------------------------------------------------------------
    # Finding impact
    # -------------------------------------------------------------------------
    IMPACT_HIGH = "bold red"
    IMPACT_MEDIUM = "yellow"
    IMPACT_LOW = "cyan"
    IMPACT_INFO = "grey62"

    # -------------------------------------------------------------------------
    # Sync state
    # -------------------------------------------------------------------------
    IN_SYNC = "green"
    OUT_OF_SYNC = "bold yellow"
    SYNC_UNKNOWN = "grey62"

    # -------------------------------------------------------------------------
    # Table columns
    # -------------------------------------------------------------------------
    TABLE_ID = "cyan"
    TABLE_SECONDARY = "grey62"

    def impact_style(self, impact: str) -> str:
        return {
            "High": self.IMPACT_HIGH,
            "Medium": self.IMPACT_MEDIUM,
            "Low": self.IMPACT_LOW,
        }.get(impact, self.IMPACT_INFO)

    def severity_style(self, severity: str) -> str:
        return {
            "error": self.IMPACT_HIGH,
            "warning": self.IMPACT_MEDIUM,
        }.get(severity, self.IMPACT_INFO)


theme = Theme()
