from typing import Any, List, Optional, Tuple
from pydantic import BaseModel, Field, StrictBool, field_validator, model_validator


class ProviderSpec(BaseModel):
    """Provider section of a TLS config mapping."""
    model_config = {"extra": "forbid"}

    target: Optional[str] = Field(default=None, min_length=1)
    module: Optional[str] = Field(default=None, min_length=1)
    function: Optional[str] = Field(default=None, min_length=1)
    args: List[Any] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_target(self) -> 'ProviderSpec':
        if self.target and (self.module or self.function):
            raise ValueError("provider takes either 'target' or 'module'/'function', not both")
        if not self.target and not (self.module and self.function):
            raise ValueError("provider requires 'target' or both 'module' and 'function'")
        return self


class TlsConfigValidator(BaseModel):
    """Validator for resolved TLS configuration values."""
    model_config = {"arbitrary_types_allowed": True}

    enabled: StrictBool = False
    optional: StrictBool = False
    provider: Any = None
    base_options: List[Tuple[str, Any]] = Field(default_factory=list)

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: Any) -> Any:
        if isinstance(v, dict):
            ProviderSpec.model_validate(v)
        elif isinstance(v, str) and not v.strip():
            raise ValueError("provider path must not be empty")
        return v
