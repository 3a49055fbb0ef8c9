"""Convert the configured soil-group archives to GeoJSON."""

import sys

from soilgroup_geojson.cli import main

if __name__ == "__main__":
    sys.exit(main())
