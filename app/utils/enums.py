from enum import Enum


class ServiceTypeEnum(str, Enum):
    SEA = "海运"
    AIR = "空运"
    LAND = "陆运"
    CUSTOMS = "清关"
    WAREHOUSE = "仓储"
    INTEGRATED = "综合"
    OTHER = "其他"


UNSELECTED_SERVICE_TYPE = "未选择"
