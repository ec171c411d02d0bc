"""
AirTraffic Live: desktop application package.

Entry point: python -m airtraffic_app.gui_main

Provides:
- JSON configuration with environment overrides (config)
- Logging setup (logger)
- PyQt5 main window wiring the map view to the demo hit feed (gui_main)
"""
