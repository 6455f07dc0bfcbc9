"""
Parameter sliders for "what-if" exploration.

Each slider edits one field of the live parameter copy. Every change is
clamped to the slider range, pushed to the animation driver (which resets to
a stopped t = 0) and never touches the parsed problem.
"""
from __future__ import annotations

from dataclasses import dataclass

from physiviz.core.animation import AnimationDriver
from physiviz.problem import LiveParameters, MotionType


@dataclass(frozen=True)
class SliderSpec:
    name: str
    label: str
    minimum: float
    maximum: float
    step: float
    unit: str

    def clamp(self, value: float) -> float:
        return min(max(float(value), self.minimum), self.maximum)


SLIDERS: dict[str, SliderSpec] = {
    s.name: s
    for s in (
        SliderSpec("velocity", "Initial velocity", 0.0, 100.0, 1.0, "m/s"),
        SliderSpec("angle", "Launch angle", 0.0, 90.0, 1.0, "°"),
        SliderSpec("gravity", "Gravity", 0.0, 30.0, 0.1, "m/s²"),
        SliderSpec("height", "Initial height", 0.0, 100.0, 1.0, "m"),
        SliderSpec("v1", "Velocity 1", -50.0, 50.0, 1.0, "m/s"),
        SliderSpec("v2", "Velocity 2", -50.0, 50.0, 1.0, "m/s"),
        SliderSpec("m1", "Mass 1", 0.1, 10.0, 0.1, "kg"),
        SliderSpec("m2", "Mass 2", 0.1, 10.0, 0.1, "kg"),
        SliderSpec("radius", "Radius", 1.0, 100.0, 1.0, "m"),
        SliderSpec("acceleration", "Acceleration", -20.0, 20.0, 0.5, "m/s²"),
    )
}

MOTION_SLIDERS: dict[MotionType, tuple[str, ...]] = {
    MotionType.PROJECTILE: ("velocity", "angle", "gravity", "height"),
    MotionType.FREE_FALL: ("velocity", "gravity", "height"),
    MotionType.LINEAR_ACCELERATION: ("velocity", "acceleration"),
    MotionType.COLLISION_1D: ("v1", "v2", "m1", "m2"),
    MotionType.CIRCULAR: ("velocity", "radius"),
}


def sliders_for(motion_type: MotionType | str) -> list[SliderSpec]:
    """Sliders shown for a motion type, in display order."""
    return [SLIDERS[name] for name in MOTION_SLIDERS[MotionType(motion_type)]]


class ControlPanel:
    """
    Slider state bound to an animation driver.

    Parameters
    ----------
    driver : AnimationDriver
        Driver that receives every edit
    original : LiveParameters | None
        Values ``restore`` returns to. Defaults to the driver's parameters
        at construction time.

    Examples
    --------
    >>> panel = ControlPanel(driver)  # doctest: +SKIP
    >>> panel.set("angle", 120)  # doctest: +SKIP
    90.0
    """

    def __init__(self, driver: AnimationDriver, original: LiveParameters | None = None) -> None:
        self.driver = driver
        self.original = original if original is not None else driver.params
        self.motion_type = driver.motion.motion_type

    @property
    def sliders(self) -> list[SliderSpec]:
        return sliders_for(self.motion_type)

    @property
    def params(self) -> LiveParameters:
        return self.driver.params

    def value(self, name: str) -> float:
        self._spec(name)
        return getattr(self.params, name)

    def _spec(self, name: str) -> SliderSpec:
        if name not in MOTION_SLIDERS[self.motion_type]:
            raise KeyError(
                f"No slider {name!r} for {self.motion_type.value}. "
                f"Valid options: {list(MOTION_SLIDERS[self.motion_type])}"
            )
        return SLIDERS[name]

    def set(self, name: str, value: float) -> float:
        """
        Move one slider.

        Returns
        -------
        float
            The clamped value that was applied.

        Raises
        ------
        KeyError
            If the motion type has no slider called ``name``.
        """
        clamped = self._spec(name).clamp(value)
        self.driver.set_parameters(self.params.replace(**{name: clamped}))
        return clamped

    def displayed(self, name: str) -> float:
        """Position the slider shows for the current value (clamped to its range)."""
        return self._spec(name).clamp(self.value(name))

    def update_from_slider(self, name: str, value: float) -> bool:
        """
        Apply a slider reading.

        A reading equal to the displayed position is not an edit, so parsed
        values outside a slider's range survive until the user moves it.

        Returns
        -------
        bool
            True if the reading changed the live parameters.
        """
        if value == self.displayed(name):
            return False
        self.set(name, value)
        return True

    def restore(self) -> None:
        """Return every slider to the original problem values."""
        self.driver.set_parameters(self.original)


__all__ = [
    "SliderSpec",
    "SLIDERS",
    "MOTION_SLIDERS",
    "sliders_for",
    "ControlPanel",
    "LiveParameters",
]
