"""
Main NiceGUI application for mapedit.

Hosts one editable canvas backed by an in-memory map, a toolbar button that
activates / deactivates the modify control, and a status line fed by the
edit session.
"""

import logging
import sys

from nicegui import ui
from dotenv import load_dotenv
load_dotenv()

from mapedit.config import get_control_options
from mapedit.edit import EditSession, ModifyControl
from mapedit.edit.handlers import ElementCursor, setup_modify_handlers
from mapedit.map import (
    Document, Feature, LineString, Map, Point, Polygon,
    VectorLayer, VectorSource, read_features,
)
from mapedit.map.svg import layer_shapes, scene_key, svg_props
from mapedit.paths import get_data_dir
from mapedit.styles import Style

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600


def demo_features():
    """A few styled features so the page is usable without a GeoJSON file."""
    return [
        Feature(Point((-200, 100)), style=Style(fill='#e53935', radius=6), feature_id='point-1'),
        Feature(LineString([(-100, -100), (0, 0), (100, -50)]),
                style=Style(stroke='#43a047', stroke_width=2), feature_id='line-1'),
        Feature(Polygon([[(50, 50), (200, 50), (200, 200), (50, 200), (50, 50)]]),
                style=[Style(fill='#1e88e533', stroke='#1e88e5')], feature_id='polygon-1'),
    ]


def build_source(features_path=None) -> VectorSource:
    if not features_path:
        default_path = get_data_dir() / 'features.geojson'
        if default_path.exists():
            features_path = default_path
    if features_path:
        try:
            return VectorSource(read_features(features_path))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read features from {features_path}: {e}")
    return VectorSource(demo_features())


@ui.page('/')
def index():
    options = get_control_options()
    source = build_source(options.features_path)

    canvas = ui.element('div').classes('border border-slate-500 bg-slate-900').style(
        f'width: {CANVAS_WIDTH}px; height: {CANVAS_HEIGHT}px; position: relative'
    )
    map_ = Map(target=ElementCursor(canvas), size=(CANVAS_WIDTH, CANVAS_HEIGHT))
    map_.add_layer(VectorLayer(source, name='editable'))

    document = Document()
    session = EditSession()
    control = ModifyControl(source=source, **options.control_kwargs())
    control.set_map(map_)
    control.set_document(document)
    control.set_editor(session)

    setup_modify_handlers(map_, canvas, document)

    with canvas:
        sketch = ui.element('svg').classes('absolute inset-0 pointer-events-none').props(
            f'width={CANVAS_WIDTH} height={CANVAS_HEIGHT}'
        )
    drawn = {'key': None}

    def redraw():
        layers = map_.get_layers() + [control.modify_interaction.get_overlay()]
        key = scene_key(layers)
        if key == drawn['key']:
            return
        drawn['key'] = key
        sketch.clear()
        with sketch:
            for tag, attrs in layer_shapes(map_, layers):
                ui.element(tag).props(svg_props(attrs))

    redraw()
    ui.timer(0.1, redraw)

    def show_edit_feature(feature):
        if feature is None:
            status.set_text('No feature selected')
        else:
            status.set_text(f'Editing {feature.id} ({feature.get_geometry().get_type()}) '
                            f'- drag to move, Delete to remove')

    def toggle():
        if control.get_active():
            control.deactivate()
            toggle_btn.props('outline')
        else:
            control.activate()
            toggle_btn.props(remove='outline')

    with ui.row().classes('items-center gap-4'):
        toggle_btn = ui.button(control.title, icon='edit', on_click=toggle).props('outline')
        status = ui.label('No feature selected').classes('text-sm text-gray-400')

    session.on_change(show_edit_feature)
    ui.context.client.on_disconnect(lambda: control.deactivate(silent=True))


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='mapedit',
        port=8082,
        reload=not getattr(sys, 'frozen', False),
    )
