from ipbot.adapters.ip.ipify import ENDPOINTS, IpifyResolver

__all__ = ["ENDPOINTS", "IpifyResolver"]
