"""
Visualization utilities for the Lens Aperture Comparator.

This module provides all visualization functionality including:
- Interactive 2D aperture chart with Plotly (step lines, knot markers, stop-aligned axes)
- Interactive 3D lens scene with Plotly (one truncated cone per lens)
- Static PNG chart export with Matplotlib
"""
import io
import math
from typing import Dict, Mapping, Optional, Sequence, Tuple

import numpy as np
import plotly.graph_objects as go
import matplotlib.pyplot as plt
from matplotlib.ticker import FixedLocator, NullLocator

from models.constants import (
    CHART_COLORS, CHART_LINE_STYLES, CHART_HEIGHTS, FRUSTUM_SEGMENTS, MPL_STYLE_CONFIG,
    REPORT_CONFIG, SCENE_CONFIG, UI_LABELS, ChartConfig
)
from models.core import AxisPlan, ChartData, LensSpec, SpatialProxy
from services.axes import ticks_in_domain

DEFAULT_LINE_COLOR = "#94a3b8"


def format_aperture(value: float, precision: int = 1) -> str:
    """Format an f-number for axis labels and tooltips, e.g. f/2.8."""
    return f"f/{value:.{precision}f}"


# =============================================================================
# 2D APERTURE CHART
# =============================================================================

def _axis_layout(plan: AxisPlan, log: bool = False) -> Dict:
    ticks = ticks_in_domain(plan)
    layout = dict(
        tickvals=list(ticks),
        gridcolor=CHART_COLORS['grid'],
        color=CHART_COLORS['axis'],
    )
    if log:
        layout['type'] = "log"
        layout['ticktext'] = [format_aperture(t) for t in ticks]
        if plan.is_auto:
            layout['autorange'] = "reversed"
        else:
            # Domain is (max, min): the larger f-number sits at the bottom
            layout['range'] = [math.log10(plan.domain[0]), math.log10(plan.domain[1])]
    else:
        layout['ticktext'] = [f"{t:g}" for t in ticks]
        if not plan.is_auto:
            layout['range'] = list(plan.domain)
    return layout


def create_aperture_chart(
    chart_data: ChartData,
    lenses: Sequence[LensSpec],
    colors: Mapping[str, str],
    x_plan: AxisPlan,
    y_plan: AxisPlan,
    config: Optional[ChartConfig] = None
) -> go.Figure:
    """
    Create the Plotly aperture-vs-focal-length chart.

    Args:
        chart_data: Merged dataset from merge_lens_curves
        lenses: Lenses in the same order as the chart data
        colors: Lens id -> hex colour
        x_plan: Focal length axis plan
        y_plan: Aperture axis plan (log, reversed)
        config: Optional chart styling

    Returns:
        Plotly figure with one step line per lens and markers at exact knots
    """
    config = config or ChartConfig()
    fig = go.Figure()

    for lens in lenses:
        color = colors.get(lens.id, DEFAULT_LINE_COLOR)
        x, y = chart_data.series(lens.id)

        # Step line, held until the next grid point
        fig.add_trace(go.Scatter(
            x=x, y=y,
            name=lens.name,
            legendgroup=lens.id,
            mode="lines",
            line=dict(
                shape="hv",
                color=color,
                width=CHART_LINE_STYLES['width'],
                dash=CHART_LINE_STYLES['ai_dash'] if lens.is_ai_research else "solid",
            ),
            hovertemplate="%{x}mm: f/%{y:.2f}<extra>" + lens.name + "</extra>",
        ))

        # Markers only where the lens has an actual knot
        xo, yo = chart_data.original_points(lens.id)
        if len(xo):
            fig.add_trace(go.Scatter(
                x=xo, y=yo,
                name=f"{lens.name} (knots)",
                legendgroup=lens.id,
                mode="markers",
                marker=dict(color=color, size=CHART_LINE_STYLES['marker_size']),
                showlegend=False,
                hoverinfo="skip",
            ))

    fig.update_layout(
        title=config.title,
        xaxis_title=config.x_title,
        yaxis_title=config.y_title,
        xaxis=_axis_layout(x_plan),
        yaxis=_axis_layout(y_plan, log=True),
        template=config.template,
        hovermode=config.hovermode,
        height=config.height,
        showlegend=config.show_legend,
        legend=dict(orientation="h", yanchor="top", y=-0.15),
        plot_bgcolor=CHART_COLORS['background'],
        paper_bgcolor=CHART_COLORS['paper'],
    )
    return fig


# =============================================================================
# 3D LENS SCENE
# =============================================================================

def frustum_mesh(
    radius_bottom: float,
    radius_top: float,
    height: float,
    center: Tuple[float, float, float] = (0.0, 0.0, 0.0),
    segments: int = FRUSTUM_SEGMENTS
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Build a capped truncated cone as a triangle mesh.

    The center is given in scene coordinates (x, y, z) with y vertical; the
    returned vertices are in Plotly coordinates where z is vertical.

    Returns:
        Tuple (x, y, z, i, j, k) of vertex coordinates and triangle indices
    """
    cx, cy, cz = center
    angles = np.linspace(0, 2 * np.pi, segments, endpoint=False)
    cos_a, sin_a = np.cos(angles), np.sin(angles)
    base, top = cy - height / 2, cy + height / 2

    # Vertices: bottom ring, top ring, bottom centre, top centre
    x = np.concatenate([cx + radius_bottom * cos_a, cx + radius_top * cos_a, [cx, cx]])
    y = np.concatenate([cz + radius_bottom * sin_a, cz + radius_top * sin_a, [cz, cz]])
    z = np.concatenate([np.full(segments, base), np.full(segments, top), [base, top]])

    s = np.arange(segments)
    s1 = (s + 1) % segments
    bottom_center, top_center = 2 * segments, 2 * segments + 1

    i = np.concatenate([s, s1, np.full(segments, bottom_center), np.full(segments, top_center)])
    j = np.concatenate([s1, segments + s1, s1, segments + s])
    k = np.concatenate([segments + s, segments + s, s, segments + s1])
    return x, y, z, i, j, k


def _hover_text(lens: LensSpec, proxy: SpatialProxy) -> str:
    m = proxy.metrics
    lines = [f"<b>{lens.name}</b>"]
    if m is not None and not math.isnan(m.min_focal):
        lines.append(f"Focal range: {m.min_focal:g}–{m.max_focal:g}mm")
        lines.append(f"Max aperture: {format_aperture(m.min_aperture)}–{format_aperture(m.max_aperture)}")
    lines.append(f"{lens.format.label} · {lens.data_source.label}")
    return "<br>".join(lines)


def create_lens_scene(
    proxies: Sequence[SpatialProxy],
    lenses: Mapping[str, LensSpec],
    colors: Mapping[str, str],
    revision: int = 0
) -> go.Figure:
    """
    Create the Plotly 3D scene with one truncated cone per lens.

    Args:
        proxies: Normalized proxies from normalize_lenses
        lenses: Lens id -> lens (for names and metadata)
        colors: Lens id -> hex colour
        revision: Scene revision; changing it discards the retained camera state

    Returns:
        Plotly 3D figure
    """
    fig = go.Figure()

    for proxy in proxies:
        lens = lenses[proxy.lens_id]
        x, y, z, i, j, k = frustum_mesh(
            proxy.radius_bottom, proxy.radius_top, proxy.height, proxy.position
        )
        official = not lens.is_ai_research
        fig.add_trace(go.Mesh3d(
            x=x, y=y, z=z, i=i, j=j, k=k,
            name=lens.name,
            color=colors.get(lens.id, DEFAULT_LINE_COLOR),
            flatshading=False,
            lighting=dict(
                ambient=0.4,
                diffuse=0.8,
                roughness=0.35 if official else 0.6,
                specular=1.0 if official else 0.3,
            ),
            hovertext=_hover_text(lens, proxy),
            hoverinfo="text",
            showlegend=True,
        ))

    hidden_axis = dict(visible=False, showbackground=False)
    fig.update_layout(
        scene=dict(
            xaxis=hidden_axis,
            yaxis=hidden_axis,
            zaxis=hidden_axis,
            aspectmode="data",
            bgcolor=SCENE_CONFIG['background'],
            camera=dict(eye=SCENE_CONFIG['camera_eye']),
        ),
        paper_bgcolor=SCENE_CONFIG['background'],
        height=SCENE_CONFIG['height'],
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(font=dict(color=CHART_COLORS['axis'])),
        uirevision=f"scene-{revision}",
    )
    return fig


# =============================================================================
# MATPLOTLIB EXPORT
# =============================================================================

def setup_matplotlib_style():
    """Set up matplotlib style for report generation."""
    try:
        plt.style.use("seaborn-v0_8-whitegrid")
    except OSError:
        plt.style.use("seaborn-whitegrid")
    plt.rcParams.update(MPL_STYLE_CONFIG)


def create_report_png(
    chart_data: ChartData,
    lenses: Sequence[LensSpec],
    colors: Mapping[str, str],
    x_plan: AxisPlan,
    y_plan: AxisPlan,
    title: str = "Maximum Aperture vs Focal Length"
) -> bytes:
    """
    Render the aperture chart as a PNG image.

    Args:
        chart_data: Merged dataset from merge_lens_curves
        lenses: Lenses in chart order
        colors: Lens id -> hex colour
        x_plan: Focal length axis plan
        y_plan: Aperture axis plan
        title: Figure title

    Returns:
        PNG image bytes (empty for an empty chart)
    """
    if chart_data.is_empty:
        return b""

    setup_matplotlib_style()
    fig, ax = plt.subplots(figsize=CHART_HEIGHTS['report'], dpi=REPORT_CONFIG['dpi'])
    try:
        for lens in lenses:
            color = colors.get(lens.id, DEFAULT_LINE_COLOR)
            x, y = chart_data.series(lens.id)
            line, = ax.step(x, y, where="post", color=color, linewidth=CHART_LINE_STYLES['width'],
                            label=lens.name)
            if lens.is_ai_research:
                line.set_dashes(CHART_LINE_STYLES['mpl_ai_dash'])
            xo, yo = chart_data.original_points(lens.id)
            ax.plot(xo, yo, "o", color=color, markersize=4)

        ax.set_yscale("log")
        y_ticks = ticks_in_domain(y_plan)
        ax.yaxis.set_major_locator(FixedLocator(y_ticks))
        ax.yaxis.set_minor_locator(NullLocator())
        ax.set_yticklabels([format_aperture(t) for t in y_ticks])
        if not y_plan.is_auto:
            ax.set_ylim(*y_plan.domain)  # (max, min) puts the fastest aperture on top
        else:
            ax.invert_yaxis()

        ax.xaxis.set_major_locator(FixedLocator(ticks_in_domain(x_plan)))
        if not x_plan.is_auto:
            ax.set_xlim(*x_plan.domain)

        ax.set_title(title, fontsize=REPORT_CONFIG['title_size'])
        ax.set_xlabel(UI_LABELS['x_axis'])
        ax.set_ylabel(UI_LABELS['y_axis'])
        ax.legend(loc="lower right", fontsize=REPORT_CONFIG['legend_size'])

        buf = io.BytesIO()
        fig.savefig(buf, format="png", bbox_inches="tight")
        return buf.getvalue()
    finally:
        plt.close(fig)
