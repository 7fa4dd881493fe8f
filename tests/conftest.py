"""Test configuration for huepick."""

import pytest

from huepick.app.core import PickerSettings
from huepick.app.sync import SyncController
from huepick.slider import ColorSlider
from huepick.types import Channel
from huepick.wheel import ColorWheel

# Vertical tracks of this length map a position to exactly ``258 - value``.
TRACK_LENGTH = 262


@pytest.fixture
def settings():
    return PickerSettings()


@pytest.fixture
def controller(settings):
    return SyncController(settings)


@pytest.fixture
def sliders():
    return {channel: ColorSlider(mode=channel.mode, name=channel.value) for channel in Channel}


@pytest.fixture
def wheel():
    return ColorWheel()


@pytest.fixture
def attached(controller, sliders, wheel):
    controller.attach(sliders, wheel)
    return controller
