"""Map back-ends that turn markers into embeddable head/body HTML fragments.

Both renderers share one interface: ``add_marker(point, html)``,
``center(point)``, ``zoom(level)`` and ``render() -> (head, body)``.
"""

import json
from urllib.parse import quote

import folium

from .constants import GOOGLE_ZOOM, OSM_ZOOM

Point = tuple[float, float] | list[float]


class OsmMapRenderer:
    """OpenStreetMap tiles through folium/Leaflet."""

    def __init__(self, zoom: int = OSM_ZOOM, height: str = "600px", width: str = "100%"):
        self._zoom = zoom
        self._center: list[float] = [0.0, 0.0]
        self._markers: list[tuple[list[float], str]] = []
        self.height = height
        self.width = width

    def add_marker(self, point: Point, html: str) -> None:
        self._markers.append(([float(point[0]), float(point[1])], html))

    def center(self, point: Point) -> None:
        self._center = [float(point[0]), float(point[1])]

    def zoom(self, level: int) -> None:
        self._zoom = level

    def build_map(self) -> folium.Map:
        m = folium.Map(
            location=self._center,
            zoom_start=self._zoom,
            width=self.width,
            height=self.height,
        )
        for location, html in self._markers:
            folium.Marker(
                location=location,
                popup=folium.Popup(html, max_width=400),
            ).add_to(m)
        return m

    def render(self) -> tuple[str, str]:
        figure = self.build_map().get_root()
        # Rendering the figure populates its header, html and script sections
        figure.render()
        head = figure.header.render()
        body = f"{figure.html.render()}\n<script>\n{figure.script.render()}\n</script>"
        return head, body


class GoogleMapRenderer:
    """Google Maps JavaScript API v3."""

    API_URL = "https://maps.googleapis.com/maps/api/js"
    CALLBACK = "gedcomMapInitialize"
    ELEMENT_ID = "gedcom_map"

    def __init__(self, key: str, height: str = "600px", width: str = "100%"):
        self.key = key
        self.height = height
        self.width = width
        self._zoom = GOOGLE_ZOOM
        self._center: list[float] = [0.0, 0.0]
        self._markers: list[dict] = []

    def add_marker(self, point: Point, html: str) -> None:
        self._markers.append({"lat": float(point[0]), "lng": float(point[1]), "html": html})

    def center(self, point: Point) -> None:
        self._center = [float(point[0]), float(point[1])]

    def zoom(self, level: int) -> None:
        self._zoom = level

    @staticmethod
    def _to_js(value) -> str:
        # JSON is valid JS; "</" would end the surrounding <script> early
        return json.dumps(value).replace("</", "<\\/")

    def render(self) -> tuple[str, str]:
        head = (
            f'<script src="{self.API_URL}?key={quote(self.key)}&amp;callback={self.CALLBACK}" '
            "async defer></script>"
        )
        center = {"lat": self._center[0], "lng": self._center[1]}
        body = f"""<div id="{self.ELEMENT_ID}" style="height: {self.height}; width: {self.width};"></div>
<script>
function {self.CALLBACK}() {{
  var map = new google.maps.Map(document.getElementById("{self.ELEMENT_ID}"), {{
    center: {self._to_js(center)},
    zoom: {int(self._zoom)}
  }});
  var infoWindow = new google.maps.InfoWindow();
  {self._to_js(self._markers)}.forEach(function (m) {{
    var marker = new google.maps.Marker({{position: {{lat: m.lat, lng: m.lng}}, map: map}});
    marker.addListener("click", function () {{
      infoWindow.setContent(m.html);
      infoWindow.open(map, marker);
    }});
  }});
}}
</script>"""
        return head, body
