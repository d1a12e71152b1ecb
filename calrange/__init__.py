from .daterange import DateRange
from .errors import CalrangeError, InvalidIntervalError, InvalidStepError
from .factory import daterange, span, within
from .formatting import DEFAULT_FORMAT, Directive, FormatConfig
from .units import DAY, HOUR, MILLISECOND, MINUTE, SECOND, TICK, WEEK

__all__ = [
    "DateRange",
    "daterange",
    "span",
    "within",
    "Directive",
    "FormatConfig",
    "DEFAULT_FORMAT",
    "CalrangeError",
    "InvalidIntervalError",
    "InvalidStepError",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "TICK",
]
