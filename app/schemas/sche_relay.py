from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt


class SensorPayload(BaseModel):
    """Telemetry sample reported by the device."""
    # strict float still takes JSON integers; booleans, strings and NaN/inf are rejected
    angle: StrictFloat = Field(..., allow_inf_nan=False)
    rep: StrictInt = Field(..., ge=0)
    running: StrictBool
    deviceStatus: Optional[str] = None

    model_config = ConfigDict(extra='ignore')


class TelemetryMessage(BaseModel):
    type: Literal['sensor']
    payload: SensorPayload


class ControlMessage(BaseModel):
    """Operator command. Only the known flags are checked, the rest is forwarded as-is."""
    type: Literal['control']
    running: Optional[StrictBool] = None
    reset: Optional[StrictBool] = None
    pause: Optional[StrictBool] = None
    resume: Optional[StrictBool] = None

    model_config = ConfigDict(extra='allow')


class RelayStateResponse(BaseModel):
    connections: int
    state: SensorPayload
