"""Errors raised by the inventory check services."""


class InventoryCheckError(Exception):
    """Base class for inventory check failures surfaced to callers."""


class ScheduleNotFoundError(InventoryCheckError):
    """The production schedule to check does not exist."""

    def __init__(self, schedule_id: str):
        self.schedule_id = schedule_id
        super().__init__(f"Production schedule not found: {schedule_id}")


class ShortageNotFoundError(InventoryCheckError):
    """The shortage to resolve does not exist."""

    def __init__(self, shortage_id: str):
        self.shortage_id = shortage_id
        super().__init__(f"Shortage not found: {shortage_id}")
