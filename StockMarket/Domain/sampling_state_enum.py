from enum import Enum, auto

class SamplingState(Enum):
    INIT = auto()
    DISPATCHING = auto()
    AWAITING = auto()
    NORMALIZING = auto()
    DONE = auto()
    FAILED = auto()
