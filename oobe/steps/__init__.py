from .step_10_set_hostname import SetHostnameStep
from .step_20_set_locale import SetLocaleStep
from .step_30_add_user import AddUserStep
from .step_40_set_hwclock import SetHwclockStep
from .step_50_create_swapfile import CreateSwapfileStep
from .step_60_set_fullname import SetFullnameStep
from .step_70_set_timezone import SetTimezoneStep
from .step_80_regenerate_machine_id import RegenerateMachineIdStep

__all__ = [
    "SetHostnameStep",
    "SetLocaleStep",
    "AddUserStep",
    "SetHwclockStep",
    "CreateSwapfileStep",
    "SetFullnameStep",
    "SetTimezoneStep",
    "RegenerateMachineIdStep",
]
