"""
AirTraffic Live: animated world map of geolocated hits.

Provides:
- Map projection of lat/lon onto the fitted map bitmap (geo.projection)
- Hit data model (geo.hit)
- Toolkit-independent frame rendering and animation clock (render/)
- PyQt5 host widget, scheduler and generated assets (gui/)
- Synthetic hit feed for demonstration (feed)
"""
