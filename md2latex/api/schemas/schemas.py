from pydantic import BaseModel


# --- Conversion ---
class ConvertRequest(BaseModel):
    markdown: str
    include_preprocessed: bool = False


class ConvertResponse(BaseModel):
    latex: str
    preprocessed: str | None = None
