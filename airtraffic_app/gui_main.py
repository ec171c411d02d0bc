"""
AirTraffic Live: desktop viewer.

Built with PyQt5.

Architecture:
    ┌───────────────────────────────────────────────┐
    │  HitFeed (QTimer)  ──hits_changed──▶  view    │
    │                                               │
    │  AirTrafficView (QWidget)                     │
    │    ├── QtScheduler (QTimer) → FrameClock      │
    │    │         └──▶ update() → paintEvent       │
    │    └── AirTrafficScene → Renderer → QPainter  │
    └───────────────────────────────────────────────┘
"""
from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from airtraffic.feed import HitFeed
from airtraffic.gui.assets import (
    PaletteResourceProvider,
    PixmapMapAsset,
    fallback_map_asset,
    load_map_asset,
)
from airtraffic.gui.map_view import AirTrafficView

from .config import AppConfig, load_config
from .logger import setup_logging

log = logging.getLogger(__name__)


def resolve_map_asset(map_path: Optional[str]) -> PixmapMapAsset:
    """Load the configured map, falling back to the generated one."""
    if not map_path:
        return fallback_map_asset()
    try:
        return load_map_asset(Path(map_path))
    except (FileNotFoundError, ValueError) as exc:
        log.warning("%s: using generated map", exc)
        return fallback_map_asset()


class MainWindow(QtWidgets.QMainWindow):
    """Map view plus an fps readout in the status bar."""

    def __init__(self, cfg: AppConfig, demo: bool = True):
        super().__init__()
        self.setWindowTitle(cfg.label_text)

        self.view = AirTrafficView(
            resolve_map_asset(cfg.map_path),
            policy=cfg.interval_policy(),
            label=cfg.label_text,
        )
        self.view.set_label_height(cfg.label_height)
        self.view.set_resource_provider(PaletteResourceProvider(cfg.sites))
        self.setCentralWidget(self.view)

        self._fps_label = QtWidgets.QLabel("")
        self.statusBar().addPermanentWidget(self._fps_label)
        self.view.fps_changed.connect(self._on_fps)

        self.feed: Optional[HitFeed] = None
        if demo:
            self.feed = HitFeed(
                cfg.sites,
                rate_hz=cfg.demo_rate_hz,
                max_hits=cfg.demo_max_hits,
                parent=self,
            )
            self.feed.hits_changed.connect(self.view.set_hits)
            self.feed.start()

    def _on_fps(self, fps: float) -> None:
        self._fps_label.setText(f"{fps:.1f} fps")

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        if self.feed is not None:
            self.feed.stop()
        self.view.pause()
        super().closeEvent(event)


def main():
    parser = argparse.ArgumentParser(description="AirTraffic Live: world map of hits")
    parser.add_argument("--config", type=Path, default=None,
                        help="Path to a JSON config file")
    parser.add_argument("--map", dest="map_path", default=None,
                        help="World map image (overrides the config)")
    parser.add_argument("--no-demo", action="store_true",
                        help="Do not start the synthetic hit feed")
    parser.add_argument("--debug", action="store_true",
                        help="Log at DEBUG level (includes fps)")
    args, remaining = parser.parse_known_args()

    cfg = load_config(args.config)
    if args.map_path:
        cfg.map_path = args.map_path

    setup_logging("DEBUG" if args.debug else cfg.log_level.upper())

    sys.argv = sys.argv[:1] + remaining
    app = QtWidgets.QApplication(sys.argv)
    app.setStyle("Fusion")

    palette = QtGui.QPalette()
    palette.setColor(QtGui.QPalette.Window, QtGui.QColor("#060a10"))
    palette.setColor(QtGui.QPalette.WindowText, QtGui.QColor("#c0d0e0"))
    palette.setColor(QtGui.QPalette.Base, QtGui.QColor("#080c14"))
    palette.setColor(QtGui.QPalette.Text, QtGui.QColor("#c0d0e0"))
    app.setPalette(palette)

    win = MainWindow(cfg, demo=not args.no_demo)
    if cfg.kiosk:
        win.showFullScreen()
    else:
        win.resize(1080, 750)
        win.show()

    def _sigint_handler(*_args):
        log.info("Signal received: shutting down")
        win.close()

    signal.signal(signal.SIGINT, _sigint_handler)
    signal.signal(signal.SIGTERM, _sigint_handler)

    # Qt's event loop blocks Python signal delivery; wake it periodically
    _sig_timer = QtCore.QTimer()
    _sig_timer.timeout.connect(lambda: None)
    _sig_timer.start(200)

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
