from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .font_loader import FontLoader
from .geometry import ORIGIN, format_number
from .models.wireframe import Mockup, Wireframe, sort_by_z_order
from .options import ConvertOptions
from .renderer import Renderer
from .svg_surface import SVG_NAMESPACE, XLINK_NAMESPACE, SvgSurface
from .text_metrics import PillowTextMeasurer, TextMeasurer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    x: float
    y: float
    width: float
    height: float

    @property
    def view_box(self) -> str:
        return " ".join(format_number(value) for value in (self.x, self.y, self.width, self.height))


def compute_viewport(mockup: Mockup, padding: float) -> Viewport:
    """Viewport that re-centres content which overflowed the logical canvas."""
    mockup_w, mockup_h = mockup.canvas_size
    measured_w, measured_h = mockup.measured_size
    return Viewport(
        x=measured_w - mockup_w - padding,
        y=measured_h - mockup_h - padding,
        width=mockup_w + padding * 2,
        height=mockup_h + padding * 2,
    )


class WireframeConverter:
    def __init__(
        self,
        *,
        measurer: TextMeasurer | None = None,
        font_loader: FontLoader | None = None,
    ) -> None:
        self._measurer = measurer or PillowTextMeasurer()
        self._font_loader = font_loader or FontLoader()

    async def convert(
        self,
        wireframe: Wireframe | Mapping[str, Any],
        options: ConvertOptions | Mapping[str, Any] | None = None,
    ) -> SvgSurface:
        """Render a wireframe document into an SVG surface.

        Args:
            wireframe: Parsed ``Wireframe`` or its raw JSON mapping
            options: Padding and font configuration

        Returns:
            The root surface; unsupported controls are listed in ``diagnostics``

        Raises:
            FontLoadError: If ``font_url`` is set and the font cannot be loaded
        """
        document = wireframe if isinstance(wireframe, Wireframe) else Wireframe.model_validate(wireframe)
        resolved = _resolve_options(options)

        if resolved.font_url:
            await self._font_loader.load(resolved.font_family, resolved.font_url, self._measurer)

        return await asyncio.to_thread(self.render_document, document, resolved)

    def render_document(self, document: Wireframe, options: ConvertOptions) -> SvgSurface:
        """Draw every control of an already validated document; blocking."""
        mockup = document.mockup
        viewport = compute_viewport(mockup, options.padding)
        surface = SvgSurface(
            {
                "xmlns": SVG_NAMESPACE,
                "xmlns:xlink": XLINK_NAMESPACE,
                "viewBox": viewport.view_box,
                "style": f"font-family: {options.font_family}",
            }
        )

        renderer = Renderer(surface, options.font_family, self._measurer)
        controls = sort_by_z_order(mockup.controls.control)
        for control in controls:
            renderer.render(control, surface.root, ORIGIN)
        surface.diagnostics.extend(renderer.diagnostics)

        logger.info(
            "Rendered wireframe",
            extra={
                "wireframe": document.attributes.name,
                "controls": len(controls),
                "view_box": viewport.view_box,
                "diagnostics": len(renderer.diagnostics),
            },
        )
        return surface


def convert_sync(
    wireframe: Wireframe | Mapping[str, Any],
    options: ConvertOptions | Mapping[str, Any] | None = None,
    *,
    converter: WireframeConverter | None = None,
) -> SvgSurface:
    """Blocking wrapper around ``WireframeConverter.convert``; not for use inside a running loop."""
    return asyncio.run((converter or WireframeConverter()).convert(wireframe, options))


def wireframe_to_svg_string(
    wireframe: Wireframe | Mapping[str, Any],
    options: ConvertOptions | Mapping[str, Any] | None = None,
    *,
    converter: WireframeConverter | None = None,
) -> str:
    return convert_sync(wireframe, options, converter=converter).to_string()


def _resolve_options(options: ConvertOptions | Mapping[str, Any] | None) -> ConvertOptions:
    if options is None:
        return ConvertOptions()
    if isinstance(options, ConvertOptions):
        return options
    return ConvertOptions.model_validate(options)


__all__ = [
    "Viewport",
    "WireframeConverter",
    "compute_viewport",
    "convert_sync",
    "wireframe_to_svg_string",
]
