"""Client options"""

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from spotify_web_api import settings


class Options(BaseModel):
    """Behaviour switches shared by the client and the request layer

    Unknown keys are ignored so callers can pass a wider settings mapping.
    """

    auto_refresh: bool = Field(default=False)
    auto_retry: bool = Field(default=False)
    return_assoc: bool = Field(default=False)

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_settings(cls) -> "Options":
        """Build options from the environment backed defaults in settings"""
        return cls(
            auto_refresh=settings.AUTO_REFRESH,
            auto_retry=settings.AUTO_RETRY,
            return_assoc=settings.RETURN_ASSOC,
        )

    def merged(self, update: Optional[Union["Options", Mapping[str, Any]]]) -> "Options":
        """Return a copy with the recognised keys of ``update`` applied"""
        if update is None:
            return self
        if isinstance(update, Options):
            values = update.model_dump(exclude_unset=True)
        else:
            values = {key: value for key, value in update.items() if key in type(self).model_fields}
        # Re-validated so "1"/"true" style values become bools
        return type(self).model_validate({**self.model_dump(), **values})
