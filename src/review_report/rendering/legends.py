"""
Legend and provider badge rendering

Produces small HTML fragments: a provider row (color dot, label, premise
badge) and legend rows with a value on the right.
"""
import logging
from html import escape
from typing import Dict, Iterable, List, Optional

from .. import config
from ..providers import normalize_label_key

logger = logging.getLogger(__name__)


def _badge(on_premises: Optional[bool]) -> str:
    if on_premises is True:
        key = "on"
    elif on_premises is False:
        key = "off"
    else:
        return ""
    return (
        f'<span class="premise-badge premise-{key}" '
        f'style="color:{config.PREMISE_COLORS[key]}">{escape(config.PREMISE_LABELS[key])}</span>'
    )


def provider_item_html(label, color=None, on_premises=None, show_badge=True) -> str:
    """One provider entry: color dot + label (+ premise badge)"""
    color = color or config.DEFAULT_SERIES_COLOR
    key = escape(normalize_label_key(label), quote=True)
    badge = _badge(on_premises) if show_badge else ""
    return (
        f'<div class="provider-item" data-provider="{key}">'
        f'<span class="provider-dot" style="background-color:{escape(color, quote=True)}"></span>'
        f'<span class="provider-label">{escape(str(label or ""))}</span>'
        f"{badge}"
        f"</div>"
    )


class HtmlLegendRenderer:
    """
    Legend collaborator for the report

    Fragments are kept per container id in self.fragments.
    """

    def __init__(self):
        self.fragments: Dict[str, str] = {}

    def render_providers(self, container: str, providers: Iterable[dict]) -> str:
        """
        Provider badge row

        Args:
            container: Container id
            providers: Dicts with label, color and on_premises
        """
        items = [
            provider_item_html(
                p.get("label"), p.get("color"), p.get("on_premises")
            )
            for p in providers
        ]
        html = "".join(items)
        self.fragments[container] = html
        logger.debug(f"Rendered {len(items)} providers into '{container}'")
        return html

    def render_legend_with_values(self, container: str, items: Iterable) -> str:
        """
        Legend rows with a value column

        Args:
            container: Container id
            items: LegendItem objects or dicts with label, color and value
        """
        rows: List[str] = []
        for item in items:
            if isinstance(item, dict):
                label, color, value = item.get("label"), item.get("color"), item.get("value")
            else:
                label, color, value = item.label, item.color, item.value
            rows.append(
                '<div class="legend-row">'
                f"{provider_item_html(label, color, show_badge=False)}"
                f'<span class="legend-value">{escape(str(value))}</span>'
                "</div>"
            )

        html = "".join(rows)
        self.fragments[container] = html
        logger.debug(f"Rendered {len(rows)} legend rows into '{container}'")
        return html
