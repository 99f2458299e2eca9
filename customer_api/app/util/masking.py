from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional
from pydantic import BaseModel, model_serializer


def mask_value(value: Optional[Any], visible_characters_at_end: int = 4, mask_symbol: str = "*") -> Optional[str]:
    """
    Replace every character except the last ``visible_characters_at_end``
    with ``mask_symbol``.

    Values no longer than the visible window come back unchanged.
    """
    if value is None:
        return None

    text = str(value)
    hidden = max(len(text) - max(visible_characters_at_end, 0), 0)
    return mask_symbol * hidden + text[hidden:]


@dataclass(frozen=True)
class MaskPolicy:
    visible_characters_at_end: int = 4
    mask_symbol: str = "*"

    def apply(self, value):
        return mask_value(value, self.visible_characters_at_end, self.mask_symbol)


class MaskedFieldsModel(BaseModel):
    """
    Base model masking declared fields after serialization.

    Subclasses list their policies by field name in ``__mask_policies__``.
    """

    __mask_policies__: ClassVar[Dict[str, MaskPolicy]] = {}

    @model_serializer(mode="wrap")
    def mask_declared_fields(self, handler):
        data = handler(self)
        if not isinstance(data, dict):
            return data

        for name, policy in self.__mask_policies__.items():
            field_info = type(self).model_fields.get(name)
            keys = {name}
            if field_info is not None and field_info.alias:
                keys.add(field_info.alias)

            for key in keys:
                if key in data and data[key] is not None:
                    data[key] = policy.apply(data[key])

        return data
