from enum import Enum


class Section(str, Enum):
    """Bracketed headings of the config file.

    Only ``NAS_DEVICES`` changes how lines are read: bare lines are device
    entries there and ignored everywhere else.
    """

    NETWORKS = "networks"
    NAS_DEVICES = "nas_devices"
    INTERVALS = "intervals"
    BEHAVIOR = "behavior"

    @property
    def heading(self) -> str:
        return f"[{self.value}]"
