"""User Items Proxy - 게임 플랫폼 유료 아이템 수집 프록시"""

__version__ = "1.0.0"
