from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer

from procrastinot.services.countdown_scheduler import TimerFactory


class QtCountdownTimer:
    def __init__(self, interval_ms: int, callback: Callable[[], None], parent: QObject | None = None):
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(callback)
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._timer.deleteLater()


def qt_timer_factory(parent: QObject | None = None) -> TimerFactory:
    def create(interval_ms: int, callback: Callable[[], None]) -> QtCountdownTimer:
        return QtCountdownTimer(interval_ms, callback, parent)

    return create
