import dataclasses
from typing import Any, Dict

import strawberry


def set_fields(input_obj: Any) -> Dict[str, Any]:
    """Fields of a strawberry input that the client actually sent."""
    return {
        f.name: getattr(input_obj, f.name)
        for f in dataclasses.fields(input_obj)
        if getattr(input_obj, f.name) is not strawberry.UNSET
    }
