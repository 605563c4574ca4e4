from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any, Callable, Mapping

from .colors import parse_color
from .geometry import NAN, ORIGIN, Offset, format_number, parse_number
from .markup import parse_color_markup
from .models.wireframe import Control, sort_by_z_order
from .svg_surface import SvgSurface
from .text_metrics import DEFAULT_FONT_SIZE_PX, FontSpec, TextMeasurer

logger = logging.getLogger(__name__)

BORDER_WIDTH = 2.7
ARROW_WIDTH = 4
RECT_RADIUS = 10
ICON_RADIUS = 10
CHECKMARK_WIDTH = 3.5
BEZIER_BULGE = 3.6

ARROW_DASHES: Mapping[str, str] = {"dotted": "0.8 12", "dashed": "28 46"}
RULE_DASHES: Mapping[str, str] = {"dotted": "0.8, 8", "dashed": "18, 30"}


class ControlType(str, Enum):
    text_area = "TextArea"
    canvas = "Canvas"
    label = "Label"
    text_input = "TextInput"
    arrow = "Arrow"
    icon = "Icon"
    hrule = "HRule"
    group = "__group__"


DrawRoutine = Callable[[Control, ET.Element, Offset], None]


class Renderer:
    """Draws wireframe controls onto an SVG surface.

    Controls carry coordinates relative to their enclosing group. The
    renderer never writes them back; each routine receives the offset
    accumulated from its ancestors and draws at ``relative + offset``.
    """

    def __init__(self, surface: SvgSurface, font_family: str, measurer: TextMeasurer) -> None:
        self.surface = surface
        self.font_family = font_family
        self.measurer = measurer
        self.diagnostics: list[str] = []
        self._routines: dict[ControlType, DrawRoutine] = {
            ControlType.text_area: self.draw_text_area,
            ControlType.canvas: self.draw_canvas,
            ControlType.label: self.draw_label,
            ControlType.text_input: self.draw_text_input,
            ControlType.arrow: self.draw_arrow,
            ControlType.icon: self.draw_icon,
            ControlType.hrule: self.draw_hrule,
            ControlType.group: self.draw_group,
        }

    def render(self, control: Control, container: ET.Element, offset: Offset = ORIGIN) -> None:
        try:
            control_type = ControlType(control.typeID)
        except ValueError:
            message = f"'{control.typeID}' control type not implemented"
            logger.error(message, extra={"control_id": control.ID, "type_id": control.typeID})
            self.diagnostics.append(message)
            return
        self._routines[control_type](control, container, offset)

    def parse_font_properties(self, control: Control) -> FontSpec:
        properties = control.properties
        size = properties.get("size")
        return FontSpec(
            style="italic" if properties.get("italic") else "normal",
            weight="bold" if properties.get("bold") else "normal",
            size=f"{size}px" if size else f"{DEFAULT_FONT_SIZE_PX}px",
            family=self.font_family,
        )

    def draw_rectangle(self, control: Control, container: ET.Element, offset: Offset) -> None:
        properties = control.properties
        x, y = _absolute(control, offset)
        background_alpha = properties.get("backgroundAlpha")
        self.surface.create_element(
            "rect",
            {
                "x": x + BORDER_WIDTH / 2,
                "y": y + BORDER_WIDTH / 2,
                "width": control.width - BORDER_WIDTH,
                "height": control.height - BORDER_WIDTH,
                "rx": RECT_RADIUS,
                "fill": parse_color(properties.get("color"), "255,255,255"),
                "fill-opacity": 1 if background_alpha is None else background_alpha,
                "stroke": parse_color(properties.get("borderColor"), "0,0,0"),
                "stroke-width": BORDER_WIDTH,
            },
            container,
        )

    def add_text(
        self,
        control: Control,
        container: ET.Element,
        offset: Offset,
        text_color: str,
        align: str,
    ) -> ET.Element:
        """Emit a ``text`` element with one ``tspan`` per markup run.

        Centered text uses the control width; the vertical position is the
        measured height midpoint shifted down by half the glyph ascent.
        """
        content = str(control.properties.get("text") or "")
        x, y = _absolute(control, offset)
        font = self.parse_font_properties(control)
        metrics = self.measurer.measure(content, font)

        if align == "center":
            text_x = x + control.width / 2 - metrics.width / 2
        else:
            text_x = x
        text_y = y + control.measured_height / 2 + metrics.ascent / 2

        text_element = self.surface.create_element(
            "text",
            {
                "x": text_x,
                "y": text_y,
                "fill": text_color,
                "font-style": font.style,
                "font-weight": font.weight,
                "font-size": font.size,
            },
            container,
        )
        for run in parse_color_markup(content):
            attributes = {"fill": run.color} if run.color else {}
            self.surface.create_element("tspan", attributes, text_element, text=run.text)
        return text_element

    def draw_text_area(self, control: Control, container: ET.Element, offset: Offset) -> None:
        self.draw_rectangle(control, container, offset)

    def draw_canvas(self, control: Control, container: ET.Element, offset: Offset) -> None:
        self.draw_rectangle(control, container, offset)

    def draw_label(self, control: Control, container: ET.Element, offset: Offset) -> None:
        color = parse_color(control.properties.get("color"), "0,0,0")
        self.add_text(control, container, offset, color, "left")

    def draw_text_input(self, control: Control, container: ET.Element, offset: Offset) -> None:
        self.draw_rectangle(control, container, offset)
        color = parse_color(control.properties.get("textColor"), "0,0,0")
        self.add_text(control, container, offset, color, "center")

    def draw_arrow(self, control: Control, container: ET.Element, offset: Offset) -> None:
        properties = control.properties
        x, y = _absolute(control, offset)
        start_x, start_y = _point(properties.get("p0"), 0, 0)
        factor, bulge = _point(properties.get("p1"), 0.5, 0)
        end_x, end_y = _point(properties.get("p2"), 0, 0)

        lx = (end_x - start_x) * factor
        ly = (end_y - start_y) * factor
        control_x = x + start_x + lx + ly * bulge * BEZIER_BULGE
        control_y = y + start_y + ly - lx * bulge * BEZIER_BULGE

        path = "M{} {}Q{} {} {} {}".format(
            *(
                format_number(value)
                for value in (x + start_x, y + start_y, control_x, control_y, x + end_x, y + end_y)
            )
        )
        self.surface.create_element(
            "path",
            {
                "d": path,
                "fill": "none",
                "stroke": parse_color(properties.get("color"), "0,0,0"),
                "stroke-width": ARROW_WIDTH,
                "stroke-linecap": "round",
                "stroke-linejoin": "round",
                "stroke-dasharray": ARROW_DASHES.get(properties.get("stroke"), ""),
            },
            container,
        )

    def draw_icon(self, control: Control, container: ET.Element, offset: Offset) -> None:
        properties = control.properties
        x, y = _absolute(control, offset)
        self.surface.create_element(
            "circle",
            {
                "cx": x + ICON_RADIUS,
                "cy": y + ICON_RADIUS,
                "r": ICON_RADIUS,
                "fill": parse_color(properties.get("color"), "0,0,0"),
            },
            container,
        )

        icon = properties.get("icon") or {}
        if icon.get("ID") == "check-circle":
            points = (
                (x + 4.5, y + ICON_RADIUS),
                (x + 8.5, y + ICON_RADIUS + 4),
                (x + 15, y + ICON_RADIUS - 2.5),
            )
            (ax, ay), (bx, by), (cx, cy) = (
                (format_number(px), format_number(py)) for px, py in points
            )
            self.surface.create_element(
                "path",
                {
                    "d": f"M{ax} {ay}L{bx} {by} {cx} {cy}",
                    "fill": "none",
                    "stroke": "#fff",
                    "stroke-width": CHECKMARK_WIDTH,
                    "stroke-linecap": "round",
                    "stroke-linejoin": "round",
                },
                container,
            )

    def draw_hrule(self, control: Control, container: ET.Element, offset: Offset) -> None:
        properties = control.properties
        x, y = _absolute(control, offset)
        start_x, start_y, end_x = (format_number(v) for v in (x, y, x + control.width))
        self.surface.create_element(
            "path",
            {
                "d": f"M{start_x} {start_y}L{end_x} {start_y}",
                "fill": "none",
                "stroke": parse_color(properties.get("color"), "0,0,0"),
                "stroke-width": BORDER_WIDTH,
                "stroke-linecap": "round",
                "stroke-linejoin": "round",
                "stroke-dasharray": RULE_DASHES.get(properties.get("stroke"), ""),
            },
            container,
        )

    def draw_group(self, control: Control, container: ET.Element, offset: Offset) -> None:
        group_name = control.control_name
        attributes = {"class": "clickable-group", "data-group-id": group_name} if group_name else {}
        group_element = self.surface.create_element("g", attributes, container)

        child_offset = offset.shifted(control.left, control.top)
        for child in sort_by_z_order(control.child_controls()):
            self.render(child, group_element, child_offset)


def _absolute(control: Control, offset: Offset) -> tuple[float, float]:
    return control.left + offset.x, control.top + offset.y


def _point(value: Any, default_x: float, default_y: float) -> tuple[float, float]:
    if not isinstance(value, Mapping):
        return default_x, default_y
    return _coordinate(value, "x", default_x), _coordinate(value, "y", default_y)


def _coordinate(point: Mapping[str, Any], key: str, default: float) -> float:
    # Missing coordinates take the default; present but malformed ones are NaN.
    if point.get(key) is None:
        return default
    return parse_number(point[key], NAN)


__all__ = ["ARROW_DASHES", "BORDER_WIDTH", "ControlType", "RULE_DASHES", "Renderer"]
