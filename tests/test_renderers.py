"""Tests for the map back-ends."""

from gedcom_map.renderers import GoogleMapRenderer, OsmMapRenderer

KEY = "AIza" + "B" * 35


class TestOsmMapRenderer:
    """Tests for the folium/OpenStreetMap renderer."""

    def test_render_returns_head_and_body(self):
        renderer = OsmMapRenderer()
        renderer.add_marker([48.8566, 2.3522], "<b>Paris</b>")
        renderer.center([48.8566, 2.3522])
        head, body = renderer.render()

        assert "leaflet" in head.lower()
        assert "<script>" in body
        assert "48.8566" in body
        assert "<b>Paris</b>" in body

    def test_default_zoom(self):
        assert OsmMapRenderer()._zoom == 12

    def test_markers_added(self):
        renderer = OsmMapRenderer()
        renderer.add_marker((1.0, 2.0), "a")
        renderer.add_marker((3.0, 4.0), "b")
        m = renderer.build_map()

        markers = [c for c in m._children.values() if type(c).__name__ == "Marker"]
        assert len(markers) == 2


class TestGoogleMapRenderer:
    """Tests for the Google Maps renderer."""

    def test_head_loads_api_with_key(self):
        head, _ = GoogleMapRenderer(KEY).render()
        assert "maps.googleapis.com/maps/api/js" in head
        assert f"key={KEY}" in head

    def test_body_has_center_zoom_and_markers(self):
        renderer = GoogleMapRenderer(KEY)
        renderer.add_marker([48.8566, 2.3522], "<b>Paris</b>")
        renderer.center([48.8566, 2.3522])
        renderer.zoom(4)
        _, body = renderer.render()

        assert '{"lat": 48.8566, "lng": 2.3522}' in body
        assert "zoom: 4" in body
        assert "google.maps.Marker" in body
        assert 'style="height: 600px; width: 100%;"' in body

    def test_popup_html_cannot_close_script(self):
        renderer = GoogleMapRenderer(KEY)
        renderer.add_marker([0, 0], "</script><b>x</b>")
        _, body = renderer.render()

        assert "</script><b>" not in body
        assert body.count("</script>") == 1
