"""
查询参数校验 - GET / 的必填项与取值检查

缺失（missing）与无效（invalid）是两个互不重叠的类别：
参数存在但取值不合法只会出现在 invalid 中。
"""

from typing import Dict, List, Mapping, Tuple

from bizinsight.domain.resolver import to_amount, to_months


REQUIRED_PARAMS: Tuple[str, ...] = (
    "current_revenue",
    "previous_revenue",
    "total_expenses",
    "customer_base",
    "industry",
)
NUMERIC_PARAMS: Tuple[str, ...] = (
    "current_revenue",
    "previous_revenue",
    "total_expenses",
    "customer_base",
)
OPTIONAL_PARAMS: Tuple[str, ...] = ("months",)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_report_params(params: Mapping[str, str]) -> Tuple[List[str], List[str]]:
    """
    校验报告查询参数

    Returns:
        (missing, invalid): 按参数声明顺序排列
    """
    missing = [name for name in REQUIRED_PARAMS if _is_blank(params.get(name))]

    invalid = []
    for name in NUMERIC_PARAMS:
        if name in missing:
            continue
        amount = to_amount(params.get(name))
        if amount is None:
            invalid.append(name)
        elif name == "previous_revenue" and amount == 0:
            # 上期营收为 0 时无法计算增长率
            invalid.append(name)

    months = params.get("months")
    if not _is_blank(months) and to_months(months) is None:
        invalid.append("months")

    return missing, invalid


def collect_report_params(params: Mapping[str, str]) -> Dict[str, str]:
    """提取已知的报告参数（去除首尾空白，未提供的可选参数省略）"""
    collected = {}
    for name in REQUIRED_PARAMS + OPTIONAL_PARAMS:
        value = params.get(name)
        if not _is_blank(value):
            collected[name] = str(value).strip()
    return collected
