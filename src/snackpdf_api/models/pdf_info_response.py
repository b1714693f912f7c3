from pydantic import BaseModel, ConfigDict, Field


class PdfInfoResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    size: int
    pages: int
    temp_path: str = Field(alias='tempPath')
