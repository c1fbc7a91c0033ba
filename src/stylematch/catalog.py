"""Read-only product catalog backed by the ``products`` document."""

from typing import List

from pydantic import ValidationError

from core.logging import get_logger
from stylematch.models import Product
from stylematch.store import PRODUCTS_SCOPE, DocumentStore

logger = get_logger(__name__)


class ProductCatalog:
    def __init__(self, store: DocumentStore, scope: str = PRODUCTS_SCOPE):
        self._store = store
        self._scope = scope

    @property
    def location(self) -> str:
        return self._store.location(self._scope)

    def load(self) -> List[Product]:
        raw = self._store.get(self._scope, default=[])
        if not isinstance(raw, list):
            logger.warning("Product catalog is not a list", scope=self._scope)
            return []

        products: List[Product] = []
        skipped = 0
        for record in raw:
            try:
                products.append(Product.model_validate(record))
            except ValidationError:
                skipped += 1
        if skipped:
            logger.warning("Skipped invalid catalog entries", skipped=skipped, loaded=len(products))
        return products
