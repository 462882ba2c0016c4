from pydantic import BaseModel, ConfigDict


class Detector(BaseModel):
    """Catalog entry for one analyzer rule, keyed by ``check``."""

    model_config = ConfigDict(extra="allow")

    index: int = 0
    check: str
    title: str = ""
    impact: str = ""
    confidence: str = ""
    wiki_url: str = ""
    description: str = ""
    exploit_scenario: str = ""
    recommendation: str = ""
