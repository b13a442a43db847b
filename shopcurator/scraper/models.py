# module shopcurator.scraper.models
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ScrapeRequest(BaseModel):
    # Optionnel pour pouvoir répondre 400 (et non 422) quand l'URL manque
    url: Optional[str] = None


class ProductListing(BaseModel):
    """
    Fiche produit extraite d'une page.
    - Produite une fois par requête /scrape, jamais persistée, immuable.
    - Les valeurs par défaut signifient « champ non trouvé ».
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    price: Decimal = Field(default=Decimal("0"), ge=0)
    image: str = ""
    description: str = Field(default="", max_length=500)
    source_url: str = Field(alias="sourceUrl")

    @field_serializer("price")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)
