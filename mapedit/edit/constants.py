"""
Shared constants for the modify control.

Cursor names are CSS cursor values, applied to the viewport element.
"""

# Cursor while the pointer is over a vertex of the edited feature
CURSOR_GRAB = 'grab'

# Cursor while a feature is selected and can be moved as a whole
CURSOR_MOVE = 'move'

# Key that deletes the edited feature
DELETE_KEY = 'Delete'

# Geometry types the control can be configured for
GEOMETRY_TYPES = (
    'Point',
    'LineString',
    'Polygon',
    'MultiPoint',
    'MultiLineString',
    'MultiPolygon',
    'Circle',
)
DEFAULT_GEOMETRY_TYPE = 'Point'

# Toolbar presentation
DEFAULT_TITLE = 'Modify geometry'
DEFAULT_CLASS_NAME = 'ole-control-modify'
DEFAULT_IMAGE = 'modify_geometry.svg'

# Distance in pixels to pick up a vertex
VERTEX_PIXEL_TOLERANCE = 10
