from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from snackpdf_core.models import PageRange


class ExtractPagesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temp_path: str = Field(alias='tempPath', min_length=1)
    ranges: Optional[List[PageRange]] = None
    pages: Optional[List[int]] = None
    filename: str = 'document.pdf'
