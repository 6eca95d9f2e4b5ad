from typing import Dict, List, NamedTuple, Optional

from .schema import PaymentPreferences


class PaymentChannel(NamedTuple):
    toggle: str
    label: str
    name_field: Optional[str] = None
    number_field: Optional[str] = None


# Each channel is an independent toggle; new channels are appended here
PAYMENT_CHANNELS = [
    PaymentChannel("cash", "Cash on Arrival"),
    PaymentChannel("wechat", "WeChat Pay", "wechatName", "wechatPhone"),
    PaymentChannel("kpay", "KBZ Pay", "kpayName", "kpayPhone"),
    PaymentChannel("paylah", "PayLah!", "paylahName", "paylahPhone"),
]


def assemble_payment_methods(
    preferences: PaymentPreferences,
    channels: List[PaymentChannel] = PAYMENT_CHANNELS
) -> List[Dict]:
    """One row per enabled channel; absent account fields stay None"""
    rows = []
    for channel in channels:
        if not getattr(preferences, channel.toggle, False):
            continue
        rows.append({
            "method_type": channel.label,
            "account_name": getattr(preferences, channel.name_field, None) if channel.name_field else None,
            "account_number": getattr(preferences, channel.number_field, None) if channel.number_field else None,
        })
    return rows
