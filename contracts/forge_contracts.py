"""Forge request contracts: generation parameters and provider settings."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from enum import Enum

from config import MIN_QUANTITY, MAX_QUANTITY


class ForgeMode(str, Enum):
    """How ideas are generated."""
    TARGETED = "TARGETED"
    RANDOM = "RANDOM"


class Ecosystem(str, Enum):
    """Supported chain ecosystems."""
    SOLANA = "Solana"
    BSC = "BSC"
    BASE = "Base"
    MONAD = "Monad"
    TON = "TON"
    ETHEREUM = "Ethereum"
    ARBITRUM = "Arbitrum"


class Sector(str, Enum):
    """Supported product sectors."""
    DEFI = "DeFi"
    SOCIALFI = "SocialFi"
    GAMEFI = "GameFi"
    INFRA = "Infra"
    DEPIN = "DePin"
    NFT = "NFT"
    DAO = "DAO"


class Language(str, Enum):
    """Output languages."""
    EN = "en"
    ZH_CN = "zh-CN"
    ZH_TW = "zh-TW"
    RU = "ru"


class ForgeConfig(BaseModel):
    """Parameters of one generation call."""
    mode: ForgeMode = Field(default=ForgeMode.TARGETED)
    ecosystems: List[Ecosystem] = Field(
        default_factory=lambda: [Ecosystem.SOLANA, Ecosystem.BASE],
        description="Target chains (ignored in RANDOM mode)",
    )
    sectors: List[Sector] = Field(
        default_factory=lambda: [Sector.DEFI, Sector.INFRA],
        description="Target sectors (ignored in RANDOM mode)",
    )
    quantity: int = Field(default=3, ge=MIN_QUANTITY, le=MAX_QUANTITY)
    degen_level: int = Field(default=20, ge=0, le=100, description="0 = institutional, 100 = chaos")
    user_context: Optional[str] = Field(None, description="Free-text context from the user")

    model_config = {"frozen": True}


class ProviderSettings(BaseModel):
    """User-supplied provider overrides; every field optional.

    Persisted with camelCase keys ({apiKey, baseUrl, model}).
    """
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None


class ProviderConfig(BaseModel):
    """Effective provider configuration for one call."""
    api_key: str = Field(..., min_length=1)
    base_url: str
    model: str
