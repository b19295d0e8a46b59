# Re-export convention types
from .clock import DEFAULT_CONFIG, TimesConfig
from .types import DateTraits, Quantum, Weekday
