"""Pydantic models for the HTTP surface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from collections.abc import Iterable

    from netpresence.domain.model import Device


class RegistrationQuery(BaseModel):
    """Query parameters of a registration request."""

    model_config = ConfigDict(extra="ignore")

    name: str
    address: str


class DeviceOut(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    address: str
    last_seen: int


class DevicesResponse(BaseModel):
    devices: list[DeviceOut]

    @classmethod
    def from_devices(cls, devices: Iterable[Device]) -> DevicesResponse:
        return cls(devices=[DeviceOut.model_validate(device.as_dict()) for device in devices])
