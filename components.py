import math
from enum import Enum

from constants import DEFAULT_RESISTANCE, DEFAULT_TARGET_MARGIN, DEFAULT_VOLTAGE


class ComponentKind(Enum):
    WIRE = "wire"
    RESISTOR = "resistor"
    BATTERY = "battery"


class Component:
    """One grid cell's electrical element and its solved state.

    ``kind`` is None for an editable cell the player has not filled yet.
    A lamp is a resistor with a target-current band.
    """

    def __init__(self, kind=None, resistance=0.0, source_voltage=0.0, is_lamp=False,
                 target_current=0.0, target_margin=0.0, is_editable=False):
        if resistance < 0:
            raise ValueError(f"resistance must be >= 0, got {resistance}")
        if is_lamp and kind is not ComponentKind.RESISTOR:
            raise ValueError("only a resistor can be a lamp")
        self.kind = kind
        self.is_lamp = is_lamp
        self.is_editable = is_editable
        self.resistance = float(resistance) if kind is ComponentKind.RESISTOR else 0.0
        self.source_voltage = float(source_voltage) if kind is ComponentKind.BATTERY else 0.0
        self.target_current = float(target_current)
        self.target_margin = float(target_margin)
        self.reset_solution()

    @classmethod
    def empty(cls):
        return cls(is_editable=True)

    @classmethod
    def wire(cls):
        return cls(ComponentKind.WIRE)

    @classmethod
    def resistor(cls, resistance=DEFAULT_RESISTANCE):
        return cls(ComponentKind.RESISTOR, resistance=resistance)

    @classmethod
    def lamp(cls, resistance=DEFAULT_RESISTANCE, target_current=1.0,
             target_margin=DEFAULT_TARGET_MARGIN):
        return cls(ComponentKind.RESISTOR, resistance=resistance, is_lamp=True,
                   target_current=target_current, target_margin=target_margin)

    @classmethod
    def battery(cls, voltage=DEFAULT_VOLTAGE):
        return cls(ComponentKind.BATTERY, source_voltage=voltage)

    @property
    def is_empty(self):
        return self.kind is None

    @property
    def is_wire(self):
        return self.kind is ComponentKind.WIRE

    @property
    def is_faulted(self):
        return math.isnan(self.current)

    @property
    def goal_met(self):
        """True when this lamp's current sits inside its target band."""
        if not self.is_lamp or self.is_faulted:
            return False
        return abs(self.current - self.target_current) <= self.target_margin

    def set_main_value(self, value):
        if self.kind is ComponentKind.BATTERY:
            self.source_voltage = float(value)
        elif self.kind is ComponentKind.RESISTOR:
            if value < 0:
                raise ValueError(f"resistance must be >= 0, got {value}")
            self.resistance = float(value)
        else:
            raise ValueError(f"{self.label()} has no main value")

    def reset_solution(self):
        self.current = 0.0
        self.voltage = 0.0
        self.is_active = False

    def copy(self):
        return Component(self.kind, self.resistance, self.source_voltage, self.is_lamp,
                         self.target_current, self.target_margin, self.is_editable)

    def label(self):
        if self.kind is None:
            return "empty"
        if self.is_lamp:
            return "lamp"
        return self.kind.value

    def readout(self):
        """Lines shown when the cursor hovers this component."""
        lines = []
        if self.kind is ComponentKind.RESISTOR:
            lines.append(f"R: {self.resistance:.3g}")
            lines.append(f"A: {self.current:.3g}")
            lines.append(f"V: {self.voltage:.3g}")
        elif self.kind is ComponentKind.BATTERY:
            lines.append(f"A: {self.current:.3g}")
            lines.append(f"V: {self.source_voltage:.3g}")
        if self.is_lamp:
            lines.append(f"Target A: {self.target_current:.3g}+/-{self.target_margin:.3g}")
            lines.append("On" if self.goal_met else "Off")
        return lines

    def __repr__(self):
        if self.kind is ComponentKind.RESISTOR:
            value = f" {self.resistance:g}ohm"
        elif self.kind is ComponentKind.BATTERY:
            value = f" {self.source_voltage:g}V"
        else:
            value = ""
        return f"<{self.label()}{value} I={self.current:g}>"
