"""Synchronisation of RGB sliders, HSV sliders, alpha slider and wheel.

SyncController owns the anchor color. Every input (from any control
group) produces a new anchor; the state of every control is then derived
from that anchor in a single pass, so all groups converge to the same
state whichever one originated the change.

When live control models are attached, the controller writes the derived
state back into them. Those writes fire the controls' own change
notifications; an event-ignore counter makes the controller drop them,
since they were caused by the pass in progress rather than by the user.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterator, Mapping, Optional

import numpy as np

from huepick import defaults
from huepick.app.core import AnchorColor, PickerSettings, PickerView, SliderState, derive_view
from huepick.errors import InvalidOrientationError
from huepick.gradient import render_ramp
from huepick.slider import ColorSlider
from huepick.types import (
    HSV_CHANNELS,
    RGB_CHANNELS,
    Channel,
    HsvColor,
    RgbColor,
    check_range,
)
from huepick.wheel import ColorWheel, ring_colors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one synchronisation pass.

    Attributes:
        anchor: The reconciled anchor color.
        view: Full state of every control for ``anchor``.
        updates: Slider states that differ from before the pass.
        wheel: New wheel color, or None if unchanged.
    """

    anchor: AnchorColor
    view: PickerView
    updates: Mapping[Channel, SliderState]
    wheel: Optional[HsvColor]

    @property
    def changed(self) -> bool:
        return bool(self.updates) or self.wheel is not None


ResultCallback = Callable[[SyncResult], None]


class SyncController:
    """Keeps every picker control consistent with one anchor color."""

    def __init__(self, settings: Optional[PickerSettings] = None) -> None:
        self.settings = settings if settings is not None else PickerSettings()
        self._anchor = AnchorColor.from_rgb(self.settings.initial_color, self.settings.initial_alpha)
        self._view = derive_view(self._anchor, self.settings)

        self._ignore_counter = 0
        self._subscribers: list[ResultCallback] = []

        self._sliders: dict[Channel, ColorSlider] = {}
        self._slider_channels: dict[int, Channel] = {}
        self._wheel: Optional[ColorWheel] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def anchor(self) -> AnchorColor:
        return self._anchor

    @property
    def view(self) -> PickerView:
        return self._view

    @property
    def ignoring_events(self) -> bool:
        return self._ignore_counter != 0

    @contextmanager
    def ignore_events(self) -> Iterator[None]:
        """Drop control notifications for the duration of the block."""
        self._ignore_counter += 1
        try:
            yield
        finally:
            self._ignore_counter -= 1

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def on_rgb_changed(self, r: int, g: int, b: int, a: int) -> SyncResult:
        """RGB group (and alpha) changed: derive HSV from RGB."""
        anchor = AnchorColor.from_rgb(RgbColor(r, g, b), a)
        return self._commit(anchor, "rgb")

    def on_hsv_changed(self, h: int, s: int, v: int) -> SyncResult:
        """HSV group changed: derive RGB from HSV, alpha untouched."""
        return self._commit(self._from_hsv(HsvColor(h, s, v)), "hsv")

    def on_wheel_changed(self, hsv: HsvColor) -> SyncResult:
        return self._commit(self._from_hsv(hsv), "wheel")

    def on_alpha_changed(self, a: int) -> SyncResult:
        """Alpha changed: RGB and HSV are kept as they are."""
        check_range("alpha", a, defaults.ALPHA_MAX)
        return self._commit(self._anchor.with_alpha(a), "alpha")

    def _from_hsv(self, hsv: HsvColor) -> AnchorColor:
        return AnchorColor.from_hsv(
            hsv, self._anchor.alpha, round_channels=self.settings.round_channels,
        )

    def _commit(self, anchor: AnchorColor, origin: str) -> SyncResult:
        view = derive_view(anchor, self.settings)
        updates = MappingProxyType({
            channel: state
            for channel, state in view.sliders.items()
            if self._view.sliders.get(channel) != state
        })
        wheel = view.wheel if view.wheel != self._view.wheel else None

        self._anchor = anchor
        self._view = view
        result = SyncResult(anchor=anchor, view=view, updates=updates, wheel=wheel)
        logger.debug(
            "Sync from %s: rgb=%s hsv=%s alpha=%d, %d slider update(s)%s",
            origin, anchor.rgb, anchor.hsv, anchor.alpha, len(updates),
            ", wheel moved" if wheel is not None else "",
        )

        with self.ignore_events():
            self._apply(result.updates, result.wheel)
        self._notify(result)
        return result

    # ------------------------------------------------------------------
    # Attached controls
    # ------------------------------------------------------------------

    def attach(
        self,
        sliders: Mapping[Channel, ColorSlider],
        wheel: Optional[ColorWheel] = None,
    ) -> None:
        """Bind live control models and bring them to the current view."""
        for channel, slider in sliders.items():
            if not isinstance(channel, Channel):
                raise InvalidOrientationError(f"Unknown channel: {channel!r}")
            if slider.mode is not channel.mode:
                raise InvalidOrientationError(
                    f"Slider for {channel.value} must use mode {channel.mode.value}, "
                    f"got {slider.mode.value}"
                )
            previous = self._sliders.get(channel)
            if previous is not None and previous is not slider:
                previous.unsubscribe(self._on_slider_changed)
                self._slider_channels.pop(id(previous), None)
            bound = id(slider) in self._slider_channels
            self._sliders[channel] = slider
            self._slider_channels[id(slider)] = channel
            if not bound:
                slider.subscribe(self._on_slider_changed)

        if wheel is not None:
            wheel.keeps_value = self.settings.wheel_keeps_value
            if wheel is not self._wheel:
                if self._wheel is not None:
                    self._wheel.unsubscribe(self._on_wheel_changed)
                self._wheel = wheel
                wheel.subscribe(self._on_wheel_changed)

        with self.ignore_events():
            self._apply(self._view.sliders, self._view.wheel)

    def detach(self) -> None:
        for slider in self._sliders.values():
            slider.unsubscribe(self._on_slider_changed)
        if self._wheel is not None:
            self._wheel.unsubscribe(self._on_wheel_changed)
        self._sliders.clear()
        self._slider_channels.clear()
        self._wheel = None

    def _apply(self, updates: Mapping[Channel, SliderState], wheel: Optional[HsvColor]) -> None:
        for channel, state in updates.items():
            slider = self._sliders.get(channel)
            if slider is None:
                continue
            slider.min_color = state.min_color
            slider.max_color = state.max_color
            slider.custom_gradient = state.custom_gradient
            if slider.value != state.value:
                slider.set_value(state.value)
        if wheel is not None and self._wheel is not None:
            self._wheel.set_color(wheel)

    def _slider_value(self, channel: Channel) -> int:
        slider = self._sliders.get(channel)
        return slider.value if slider is not None else self._view[channel].value

    def _on_slider_changed(self, slider: ColorSlider) -> None:
        if self.ignoring_events:
            return
        channel = self._slider_channels.get(id(slider))
        if channel is None:
            return
        if channel in RGB_CHANNELS:
            self.on_rgb_changed(*(self._slider_value(c) for c in RGB_CHANNELS), self._anchor.alpha)
        elif channel in HSV_CHANNELS:
            self.on_hsv_changed(*(self._slider_value(c) for c in HSV_CHANNELS))
        elif channel is Channel.ALPHA:
            self.on_alpha_changed(slider.value)

    def _on_wheel_changed(self, wheel: ColorWheel) -> None:
        if self.ignoring_events:
            return
        self.on_wheel_changed(wheel.color)

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def render_slider(self, channel: Channel, length: int) -> np.ndarray:
        """Gradient strip for *channel* in the current view, over the configured backdrop."""
        state = self._view[channel]
        return render_ramp(
            length, state.custom_gradient, state.min_color, state.max_color, self.settings.backdrop,
        )

    def wheel_ring(self) -> list[RgbColor]:
        return ring_colors(self.settings.wheel_tesselation)

    # ------------------------------------------------------------------
    # Result listeners
    # ------------------------------------------------------------------

    def subscribe(self, callback: ResultCallback) -> None:
        """Register *callback* for every completed synchronisation pass."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: ResultCallback) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def _notify(self, result: SyncResult) -> None:
        for cb in list(self._subscribers):
            try:
                cb(result)
            except Exception:
                logger.warning("Sync subscriber %r raised", cb, exc_info=True)
