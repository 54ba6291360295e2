"""Data models for K4 patch data."""

from k4manager.models.name import PatchName
from k4manager.models.types import (
    Submix,
    SourceMode,
    PolyphonyMode,
    WheelAssign,
    LFOShape,
    VelocitySwitch,
    PlayMode,
    VelocityCurve,
    KeyScalingCurve,
    EffectType,
    Locality,
)
from k4manager.models.envelope import AmplifierEnvelope, FilterEnvelope
from k4manager.models.modulation import LevelModulation, TimeModulation, AutoBend
from k4manager.models.lfo import LFO, Vibrato
from k4manager.models.source import Source
from k4manager.models.amplifier import Amplifier
from k4manager.models.filter import Filter
from k4manager.models.single import SinglePatch
from k4manager.models.multi import MultiPatch, Section
from k4manager.models.drum import Drum, DrumCommon, DrumNote, DrumSource
from k4manager.models.effect import EffectPatch, SubmixSettings
from k4manager.models.bank import Bank

__all__ = [
    "PatchName",
    "Submix",
    "SourceMode",
    "PolyphonyMode",
    "WheelAssign",
    "LFOShape",
    "VelocitySwitch",
    "PlayMode",
    "VelocityCurve",
    "KeyScalingCurve",
    "EffectType",
    "Locality",
    "AmplifierEnvelope",
    "FilterEnvelope",
    "LevelModulation",
    "TimeModulation",
    "AutoBend",
    "LFO",
    "Vibrato",
    "Source",
    "Amplifier",
    "Filter",
    "SinglePatch",
    "MultiPatch",
    "Section",
    "Drum",
    "DrumCommon",
    "DrumNote",
    "DrumSource",
    "EffectPatch",
    "SubmixSettings",
    "Bank",
]
