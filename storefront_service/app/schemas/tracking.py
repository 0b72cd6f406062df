from pydantic import BaseModel, ConfigDict, Field


class ImpressionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(..., alias="productId")


class SuccessResponse(BaseModel):
    success: bool = True
