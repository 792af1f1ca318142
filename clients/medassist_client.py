import requests
from typing import Optional, Dict, Any

class MedAssistClient:
    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self.headers = {"Content-Type": "application/json"}

    def check(self, name: str, *, model: Optional[str]=None, timeout:int=60) -> Dict[str,Any]:
        """GET /api/medicines/check. Error bodies (400/502/503) are returned, not raised."""
        params = {"name": name}
        if model: params["model"] = model
        r = requests.get(f"{self.base_url}/api/medicines/check", params=params, headers=self.headers, timeout=timeout)
        if r.status_code in (400, 502, 503):
            return {"http_status": r.status_code, **r.json()}
        r.raise_for_status(); return r.json()

    def add_medication(self, *, name: str, quantity_in_stock: int, price: float=0.0,
                       dosage_frequency: Optional[str]=None, usage_instructions: Optional[str]=None,
                       food_warnings: Optional[str]=None, timeout:int=30) -> Dict[str,Any]:
        payload = {"name": name, "quantity_in_stock": quantity_in_stock, "price": price}
        if dosage_frequency: payload["dosage_frequency"] = dosage_frequency
        if usage_instructions: payload["usage_instructions"] = usage_instructions
        if food_warnings: payload["food_warnings"] = food_warnings
        r = requests.post(f"{self.base_url}/api/medicines", json=payload, headers=self.headers, timeout=timeout)
        if r.status_code == 400:
            return {"http_status": 400, **r.json()}
        r.raise_for_status(); return r.json()

    def health(self, timeout:int=10) -> Dict[str,Any]:
        r = requests.get(f"{self.base_url}/readyz", timeout=timeout)
        r.raise_for_status(); return r.json()
