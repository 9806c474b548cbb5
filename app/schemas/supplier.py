from pydantic import BaseModel


class SupplierResponse(BaseModel):
    id: str
    name: str
    contact: str
    phone: str
    category: str
    reliability: int
    whatsapp_url: str
