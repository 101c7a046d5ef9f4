# Qt widget tests run headless; the platform must be chosen before pytest-qt
# creates the QApplication.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from tourguide.design import reduced_motion
from tourguide.design.tour_definition import clear_tours


@pytest.fixture(autouse=True)
def _isolate_global_state():
    clear_tours()
    reduced_motion.set_reduced_motion(False)
    yield
    clear_tours()
    reduced_motion.set_reduced_motion(False)
