from pydantic import BaseModel, ConfigDict, Field


class UploadSignature(BaseModel):
    """Signed upload parameters issued by the backend for the asset host."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    signature: str
    timestamp: int
    cloud_name: str = Field(alias="cloudName")
    api_key: str = Field(alias="apiKey")
    folder: str


class UploadedImage(BaseModel):
    secure_url: str
    public_id: str
