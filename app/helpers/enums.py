import enum


class RelayMessageType(enum.Enum):
    SENSOR = 'sensor'
    CONTROL = 'control'


class SaveOutcome(enum.Enum):
    SAVED = 'SAVED'
    CONFLICT = 'CONFLICT'
