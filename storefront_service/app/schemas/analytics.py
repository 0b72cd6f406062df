from pydantic import BaseModel, ConfigDict, Field


class AnalyticsSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(..., alias="totalProducts")
    total_orders: int = Field(..., alias="totalOrders")
    total_clicks: int = Field(..., alias="totalClicks")
    total_impressions: int = Field(..., alias="totalImpressions")
