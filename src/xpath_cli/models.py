from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from xpath_locator.engine import MulticursorFormat
from xpath_locator.formatter import PathFormat


class SkipRuleConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_pattern: str = Field(alias="file-pattern")
    elements_to_skip: List[str] = Field(default_factory=list, alias="elements-to-skip")


class CopierSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    format: PathFormat = PathFormat.FULL
    custom_templates: List[str] = Field(default_factory=list, alias="custom-templates")
    name_attributes: List[str] = Field(default_factory=lambda: ["name"], alias="name-attributes")
    multicursor_format: MulticursorFormat = Field(MulticursorFormat.LINES, alias="multicursor-format")
    enable_element_skipping: bool = Field(False, alias="enable-element-skipping")
    skip_rules: List[SkipRuleConfig] = Field(default_factory=list, alias="skip-rules")
    enabled_formats: Dict[str, bool] = Field(default_factory=dict, alias="enabled-formats")
    name_only: bool = Field(False, alias="name-only")


class LookupResult(BaseModel):
    file_path: str
    xpath: str
    found: bool
    line: Optional[int] = None
    column: Optional[int] = None
    offset: Optional[int] = None
