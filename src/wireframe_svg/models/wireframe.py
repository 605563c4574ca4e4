from __future__ import annotations

from typing import Any, Sequence, Union

from pydantic import BaseModel, Field, field_validator

from ..geometry import parse_int, parse_number

Numeric = Union[str, int, float, None]


class ControlList(BaseModel):
    control: list[Control] = Field(default_factory=list)

    model_config = {"extra": "allow"}


class ControlChildren(BaseModel):
    controls: ControlList = Field(default_factory=ControlList)

    model_config = {"extra": "allow"}


class Control(BaseModel):
    ID: str | int = ""
    typeID: str
    zOrder: Numeric = None
    x: Numeric = None
    y: Numeric = None
    w: Numeric = None
    h: Numeric = None
    measuredW: Numeric = None
    measuredH: Numeric = None
    properties: dict[str, Any] = Field(default_factory=dict)
    children: ControlChildren | None = None

    model_config = {"extra": "allow"}

    @field_validator("properties", mode="before")
    @classmethod
    def _null_properties(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def left(self) -> float:
        return parse_int(self.x)

    @property
    def top(self) -> float:
        return parse_int(self.y)

    @property
    def width(self) -> float:
        return parse_int(self.w if self.w is not None else self.measuredW)

    @property
    def height(self) -> float:
        return parse_int(self.h if self.h is not None else self.measuredH)

    @property
    def measured_height(self) -> float:
        return parse_int(self.measuredH)

    @property
    def z_index(self) -> float:
        z = parse_number(self.zOrder, default=0.0)
        # NaN would break the ordering, so it sorts as zero
        return 0.0 if z != z else z

    @property
    def control_name(self) -> str:
        return str(self.properties.get("controlName") or "")

    def child_controls(self) -> list[Control]:
        if self.children is None:
            return []
        return list(self.children.controls.control)


class WireframeAttributes(BaseModel):
    name: str = ""
    order: float | None = None
    parentID: str | None = None
    notes: str | None = None

    model_config = {"extra": "allow"}


class GroupOffset(BaseModel):
    x: Numeric = 0
    y: Numeric = 0


class Mockup(BaseModel):
    mockupW: Numeric = None
    mockupH: Numeric = None
    measuredW: Numeric = None
    measuredH: Numeric = None
    controls: ControlList = Field(default_factory=ControlList)

    model_config = {"extra": "allow"}

    @property
    def canvas_size(self) -> tuple[float, float]:
        return parse_int(self.mockupW), parse_int(self.mockupH)

    @property
    def measured_size(self) -> tuple[float, float]:
        return parse_int(self.measuredW), parse_int(self.measuredH)


class Wireframe(BaseModel):
    mockup: Mockup
    attributes: WireframeAttributes = Field(default_factory=WireframeAttributes)
    branchID: str | None = None
    resourceID: str | None = None
    version: str | int | float | None = None
    groupOffset: GroupOffset | None = None
    dependencies: list[Any] = Field(default_factory=list)
    projectID: str | None = None

    model_config = {"extra": "allow"}


def sort_by_z_order(controls: Sequence[Control]) -> list[Control]:
    """Paint order for siblings; ``sorted`` is stable so ties keep document order."""
    return sorted(controls, key=lambda control: control.z_index)


ControlList.model_rebuild()
ControlChildren.model_rebuild()
Control.model_rebuild()


__all__ = [
    "Control",
    "ControlChildren",
    "ControlList",
    "GroupOffset",
    "Mockup",
    "Wireframe",
    "WireframeAttributes",
    "sort_by_z_order",
]
