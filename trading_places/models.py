from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from .services.metrics import trade_balance, trade_intensity


class TradeModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Observation(TradeModel):
    """A single provider data point for one country, indicator and year."""

    country: str
    country_code: str
    year: int
    indicator_id: str
    value: Optional[float] = None


class MetricRecord(TradeModel):
    """One country's trade snapshot for one year.

    Values are normalised: exports/imports/gdp in billions of US dollars,
    population in millions. Balance and intensity are always derived.
    """

    country: str
    country_code: str
    year: int
    exports: float
    imports: float
    gdp: float
    population: Optional[float] = None

    @computed_field  # type: ignore[misc]
    @property
    def trade_balance(self) -> float:
        return trade_balance(self.exports, self.imports)

    @computed_field  # type: ignore[misc]
    @property
    def trade_intensity(self) -> Optional[float]:
        return trade_intensity(self.exports, self.imports, self.gdp)


class PartnerRecord(TradeModel):
    country: str
    trade_volume: float
    balance: float
    share: float


class TradeCategories(TradeModel):
    exports: List[str] = Field(default_factory=list)
    imports: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.exports and not self.imports


class SectorTariff(TradeModel):
    sector: str
    mfn: float
    applied: float


class TariffInfo(TradeModel):
    average_mfn: float = 0.0
    average_applied: float = 0.0
    sector_tariffs: List[SectorTariff] = Field(default_factory=list)


class GrowthRates(TradeModel):
    """Year-over-year growth in percent.

    Missing comparisons default to 0.0; ``has_data`` tells the two apart.
    """

    export_growth: float = 0.0
    import_growth: float = 0.0
    has_data: bool = False


class LiveCountryRecord(TradeModel):
    """Everything the live providers returned for one requested country."""

    code: str
    country_code: str
    metrics: Optional[MetricRecord] = None
    growth: GrowthRates = Field(default_factory=GrowthRates)
    diversification_index: Optional[float] = None
    categories: TradeCategories = Field(default_factory=TradeCategories)
    trading_partners: List[PartnerRecord] = Field(default_factory=list)
    tariff_info: Optional[TariffInfo] = None

    @property
    def has_real_categories(self) -> bool:
        return not self.categories.is_empty

    @property
    def has_real_partners(self) -> bool:
        return bool(self.trading_partners)

    @property
    def has_real_growth(self) -> bool:
        return self.growth.has_data


class CountryTradeRecord(TradeModel):
    """Merged per-country record served to the dashboard."""

    code: str
    country_code: str
    name: str
    region: Optional[str] = None
    year: Optional[int] = None
    exports: float
    imports: float
    gdp: float
    population: float
    trade_intensity: Optional[float] = None
    diversification_index: float = 0.5
    export_growth: float = 0.0
    import_growth: float = 0.0
    top_exports: List[str] = Field(default_factory=list)
    top_imports: List[str] = Field(default_factory=list)
    trading_partners: List[PartnerRecord] = Field(default_factory=list)
    tariff_info: Optional[TariffInfo] = None
    has_real_metrics: bool = False
    has_real_categories: bool = False
    has_real_partners: bool = False
    has_real_growth: bool = False

    @computed_field  # type: ignore[misc]
    @property
    def trade_balance(self) -> float:
        return trade_balance(self.exports, self.imports)


class GlobalStats(TradeModel):
    total_world_trade: float
    top_trading_nations: List[str] = Field(default_factory=list)
    fastest_growing: List[str] = Field(default_factory=list)
    average_trade_intensity: float
    average_diversification_index: float
    global_trade_growth: float


class TradeSnapshot(TradeModel):
    countries: List[CountryTradeRecord] = Field(default_factory=list)
    global_stats: GlobalStats
    is_real_data: bool = False
    last_updated: Optional[str] = None


class CountryTrendPoint(TradeModel):
    year: int
    exports: float
    imports: float
    trade_balance: float
    gdp: float
    trade_intensity: Optional[float] = None


class CountryTrend(TradeModel):
    data: List[CountryTrendPoint] = Field(default_factory=list)
    export_growth_total: float = 0.0
    import_growth_total: float = 0.0
    average_exports: float = 0.0
    average_imports: float = 0.0
    years_with_data: int = 0


class YearRange(TradeModel):
    start: int
    end: int


class GlobalTrends(TradeModel):
    total_years: int = 0
    year_range: YearRange
    total_world_trade_by_year: Dict[int, float] = Field(default_factory=dict)
    top_exporters_by_year: Dict[int, List[str]] = Field(default_factory=dict)


class HistoricalTradeData(TradeModel):
    yearly_data: Dict[int, List[MetricRecord]] = Field(default_factory=dict)
    trends: Dict[str, CountryTrend] = Field(default_factory=dict)
    global_trends: GlobalTrends


class CountryTradeProfile(TradeModel):
    basic_metrics: Optional[MetricRecord] = None
    trading_partners: List[PartnerRecord] = Field(default_factory=list)
    trade_categories: TradeCategories = Field(default_factory=TradeCategories)
    tariff_info: Optional[TariffInfo] = None
    last_updated: str


class TradeDataState(TradeModel):
    data: List[CountryTradeRecord] = Field(default_factory=list)
    global_stats: Optional[GlobalStats] = None
    loading: bool = False
    error: Optional[str] = None
    last_updated: Optional[str] = None
    is_real_data: bool = False


class HistoricalTradeDataState(TradeModel):
    yearly_data: Dict[int, List[MetricRecord]] = Field(default_factory=dict)
    trends: Dict[str, CountryTrend] = Field(default_factory=dict)
    global_trends: Optional[GlobalTrends] = None
    loading: bool = False
    error: Optional[str] = None
    last_updated: Optional[str] = None
