from __future__ import annotations

from dataclasses import dataclass
import logging

from PyQt6.QtCore import QSettings

from .constants import DEFAULT_PX_PER_DAY
from .layout import RowPolicy
from .model import to_bool
from .scale import clamp_zoom

logger = logging.getLogger(__name__)

ORGANIZATION = "muutto"
APPLICATION = "Umzugs-Timeline"


@dataclass
class TimelineSettings:
    px_per_day: int = DEFAULT_PX_PER_DAY
    show_completed: bool = False
    row_policy: RowPolicy = RowPolicy.ROUND_ROBIN

    @staticmethod
    def load(settings: QSettings) -> "TimelineSettings":
        zoom_value = settings.value("view/zoom")
        if zoom_value is None:
            px_per_day = DEFAULT_PX_PER_DAY
        else:
            px_per_day = clamp_zoom(zoom_value)
        policy_value = str(settings.value("view/row_policy", RowPolicy.ROUND_ROBIN.value))
        try:
            row_policy = RowPolicy(policy_value)
        except ValueError:
            logger.warning("Unknown row policy %r in settings, using round robin", policy_value)
            row_policy = RowPolicy.ROUND_ROBIN
        return TimelineSettings(
            px_per_day=px_per_day,
            show_completed=to_bool(settings.value("view/show_completed"), False),
            row_policy=row_policy,
        )

    def save(self, settings: QSettings) -> None:
        settings.setValue("view/zoom", clamp_zoom(self.px_per_day))
        settings.setValue("view/show_completed", self.show_completed)
        settings.setValue("view/row_policy", RowPolicy(self.row_policy).value)
        settings.sync()
