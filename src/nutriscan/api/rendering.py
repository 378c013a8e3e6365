"""HTML rendering for the nutrition dashboard."""

import math
from html import escape

from nutriscan.domain.nutrition import (
    MacroBreakdown,
    NutritionRecord,
    calorie_bar_percent,
    energy_density,
    macro_breakdown,
)
from nutriscan.domain.view import Error, Idle, Loading, Success, ViewState

_CHART_RADIUS = 70
_CHART_GAP = 4.0


def render_page(state: ViewState, query: str = "", model: str = "") -> str:
    """Render the full dashboard document for a view state."""
    has_result = isinstance(state, Success)
    return _PAGE_HTML.format(
        model=escape(model),
        hero=_render_hero(has_result),
        form=_render_form(query, isinstance(state, Loading)),
        body=_render_body(state),
        hero_class="hero compact" if has_result else "hero",
    )


def _render_hero(has_result: bool) -> str:
    if has_result:
        return "<h1 class='title-small'>Analysis Results</h1>"
    return (
        "<h1><span class='gradient'>Know Your Food.</span>"
        "<span class='block'>Instantly.</span></h1>"
        "<p class='lead'>Powered by advanced AI to breakdown calories, macros, "
        "and health insights for any meal you can imagine.</p>"
    )


def _render_form(query: str, loading: bool) -> str:
    disabled = " disabled" if loading else ""
    label = "Analyzing..." if loading else "Scan &rarr;"
    return (
        "<form method='post' action='/' class='search' "
        "onsubmit=\"this.querySelector('button').disabled=true;"
        "this.querySelector('button').textContent='Analyzing...';\">"
        f"<input type='text' name='query' value='{escape(query, quote=True)}' "
        f"placeholder='What did you eat today?' autocomplete='off'{disabled} />"
        f"<button type='submit'{disabled}>{label}</button>"
        "</form>"
    )


def _render_body(state: ViewState) -> str:
    if isinstance(state, Success):
        return render_dashboard(state.record)
    if isinstance(state, Error):
        return render_error(state)
    if isinstance(state, Loading):
        return "<div class='panel loading'>Crunching the numbers...</div>"
    if isinstance(state, Idle):
        return ""
    raise TypeError(f"Unknown view state: {state!r}")


def render_error(state: Error) -> str:
    """Render the failure panel with either remediation or retry guidance."""
    if state.is_configuration_error:
        guidance = _CONFIG_REMEDIATION_HTML
    else:
        guidance = (
            "<form method='get' action='/'>"
            "<button type='submit' class='retry'>Try again</button></form>"
        )
    return (
        "<div class='panel error'>"
        "<h3>Analysis Failed</h3>"
        f"<p class='muted'>{escape(state.message)}</p>"
        f"{guidance}"
        "</div>"
    )


def render_dashboard(record: NutritionRecord) -> str:
    """Render the result cards for a nutrition record."""
    tiles = "".join(
        render_stat_tile(label, value, "g", color)
        for label, value, color in (
            ("Protein", record.protein, "#34d399"),
            ("Carbs", record.carbs, "#60a5fa"),
            ("Fats", record.fat, "#fbbf24"),
            ("Fiber", record.fiber, "#c084fc"),
            ("Sugar", record.sugar, "#f472b6"),
        )
    )
    density = (
        "<div class='tile density'><span class='label'>Density</span>"
        f"<span class='value'>{energy_density(record):.1f}</span>"
        "<span class='unit'>cal/g</span></div>"
    )
    return (
        "<div class='grid two'>"
        "<div class='panel'>"
        f"<span class='badge'>{escape(record.serving_size)}</span>"
        f"<h2>{escape(record.food_name)}</h2>"
        f"<p class='tip'>{escape(record.health_tip)}</p>"
        "</div>"
        "<div class='panel'>"
        "<span class='muted'>Total Energy</span>"
        f"<div><span class='big'>{_format_number(record.calories)}</span>"
        "<span class='unit'>kcal</span></div>"
        "<div class='bar'><div class='bar-fill' "
        f"style='width: {calorie_bar_percent(record):.1f}%'></div></div>"
        "</div>"
        "</div>"
        "<div class='grid three'>"
        "<div class='panel chart'><h3>Macro Distribution</h3>"
        f"{render_macro_chart(macro_breakdown(record))}</div>"
        f"<div class='tiles'>{tiles}{density}</div>"
        "</div>"
    )


def render_stat_tile(label: str, value: float, unit: str, color: str) -> str:
    """Render a single macro tile."""
    return (
        "<div class='tile'>"
        f"<span class='label'>{escape(label)}</span>"
        f"<span class='value' style='color: {color}'>{_format_number(value)}</span>"
        f"<span class='unit'>{escape(unit)}</span>"
        "</div>"
    )


def render_macro_chart(breakdown: MacroBreakdown) -> str:
    """Render the macro donut chart as inline SVG."""
    active = breakdown.active
    if not active:
        return "<div class='empty'>No macro data</div>"

    circumference = 2 * math.pi * _CHART_RADIUS
    gap = _CHART_GAP if len(active) > 1 else 0.0
    offset = 0.0
    segments = []
    for item in active:
        length = item.grams / breakdown.total * circumference
        visible = max(length - gap, 0.0)
        segments.append(
            f"<circle r='{_CHART_RADIUS}' cx='100' cy='100' fill='none' "
            f"stroke='{item.color}' stroke-width='20' "
            f"stroke-dasharray='{visible:.2f} {circumference - visible:.2f}' "
            f"stroke-dashoffset='{-offset:.2f}' transform='rotate(-90 100 100)'>"
            f"<title>{escape(item.name)}: {_format_number(item.grams)}g</title>"
            "</circle>"
        )
        offset += length
    return (
        "<svg viewBox='0 0 200 200' class='donut' role='img' "
        "aria-label='Macro distribution'>"
        f"{''.join(segments)}"
        f"<text x='100' y='100' class='donut-total'>{breakdown.center_label}</text>"
        "<text x='100' y='122' class='donut-caption'>TOTAL</text>"
        "</svg>"
    )


def _format_number(value: float) -> str:
    """Drop a trailing .0 so 95.0 reads as 95."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


_CONFIG_REMEDIATION_HTML = """<div class='remediation'>
  <p class='mono'>Configuration Required:</p>
  <ul>
    <li>Check the environment settings of your deployment</li>
    <li>Ensure the API key value has no extra spaces</li>
    <li>Ensure there are no quotes (use <code>sk-...</code>
      not <code>"sk-..."</code>)</li>
  </ul>
  <p class='small'>After updating, redeploy or restart the app.</p>
</div>"""


_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>NutriScan AI</title>
    <style>
      body {{ margin: 0; min-height: 100vh; color: #f1f5f9;
        font-family: ui-sans-serif, system-ui, sans-serif;
        background: radial-gradient(ellipse at top, #0f172a, #020617, #000); }}
      nav {{ max-width: 72rem; margin: 0 auto; padding: 1.5rem;
        display: flex; justify-content: space-between; }}
      nav .brand {{ font-weight: 700; font-size: 1.25rem; }}
      nav .brand em {{ color: #34d399; font-style: normal; }}
      main {{ max-width: 56rem; margin: 0 auto; padding: 2rem 1.5rem 5rem; }}
      .hero {{ text-align: center; margin: 4rem 0 2rem; }}
      .hero.compact {{ text-align: left; margin: 0 0 2rem; }}
      .hero h1 {{ font-size: 3.5rem; margin: 0; }}
      .hero .title-small {{ font-size: 1.5rem; }}
      .gradient {{ background: linear-gradient(90deg, #34d399, #22d3ee);
        -webkit-background-clip: text; color: transparent; }}
      .block {{ display: block; }}
      .lead, .muted {{ color: #94a3b8; }}
      .search {{ display: flex; gap: 0.5rem; margin-top: 2rem; }}
      .search input {{ flex: 1; padding: 1rem; border-radius: 1rem;
        border: 1px solid #334155; background: #0f172a80; color: #fff; }}
      button {{ padding: 0 1.25rem; border: 0; border-radius: 0.75rem;
        background: #10b981; color: #020617; font-weight: 600; cursor: pointer; }}
      button:disabled {{ opacity: 0.5; cursor: not-allowed; }}
      .retry {{ padding: 0.6rem 1.2rem; }}
      .panel {{ background: #0f172a99; border: 1px solid #1e293b;
        border-radius: 1.5rem; padding: 2rem; }}
      .panel.error {{ border-left: 4px solid #ef4444; }}
      .grid {{ display: grid; gap: 1.5rem; margin-bottom: 1.5rem; }}
      .grid.two {{ grid-template-columns: repeat(auto-fit, minmax(18rem, 1fr)); }}
      .grid.three {{ grid-template-columns: 1fr 2fr; }}
      .badge {{ display: inline-block; padding: 0.25rem 0.75rem;
        border-radius: 999px; color: #34d399; background: #10b98120;
        font-size: 0.75rem; text-transform: uppercase; }}
      .tip {{ color: #94a3b8; border-left: 2px solid #10b98180;
        padding-left: 1rem; }}
      .big {{ font-size: 3.75rem; font-weight: 700; }}
      .unit {{ color: #64748b; margin-left: 0.25rem; }}
      .bar {{ height: 6px; background: #1e293b; border-radius: 999px;
        overflow: hidden; margin-top: 1rem; }}
      .bar-fill {{ height: 100%;
        background: linear-gradient(90deg, #ea580c, #eab308); }}
      .tiles {{ display: grid; gap: 1rem;
        grid-template-columns: repeat(auto-fit, minmax(8rem, 1fr)); }}
      .tile {{ background: #1e293b80; border-radius: 1rem; padding: 1.25rem;
        display: flex; flex-direction: column; }}
      .tile .label {{ color: #64748b; font-size: 0.75rem; font-weight: 700;
        text-transform: uppercase; }}
      .tile .value {{ font-size: 1.875rem; font-weight: 700; }}
      .donut {{ width: 100%; max-height: 12rem; }}
      .donut text {{ text-anchor: middle; fill: #fff; }}
      .donut-total {{ font-size: 1.5rem; font-weight: 700; }}
      .donut-caption {{ font-size: 0.6rem; fill: #64748b; }}
      .remediation {{ background: #02061780; border: 1px solid #1e293b;
        border-radius: 0.5rem; padding: 1rem; font-size: 0.875rem; }}
      .mono {{ font-family: ui-monospace, monospace; color: #34d399;
        font-weight: 700; }}
      .small {{ color: #64748b; font-size: 0.75rem; }}
    </style>
  </head>
  <body>
    <nav>
      <span class="brand">NutriScan<em>AI</em></span>
      <span class="muted">Model: {model}</span>
    </nav>
    <main>
      <section class="{hero_class}">
        {hero}
        {form}
      </section>
      {body}
    </main>
  </body>
</html>
"""
