from __future__ import annotations

import streamlit as st

from storeadmin.api import get_client
from storeadmin.config import get_settings
from storeadmin.services.catalog import list_categories, list_products
from storeadmin.services.variants import list_low_stock
from storeadmin.ui import fetch

st.set_page_config(page_title="Store Admin", page_icon="🛍️", layout="wide")

st.title("🛍️ Store Admin")
st.caption("Catalog, stock, coupons, banners and orders for the storefront, managed over the store REST API.")

settings = get_settings()
api = get_client(settings.api_base_url)

with st.sidebar:
    st.subheader("Environment")
    st.write(f"**API:** `{settings.api_base_url}`")
    st.write(f"**Uploads:** `{settings.uploads_base_url}`")

categories = fetch(lambda: list_categories(api), "categories")
products = fetch(lambda: list_products(api), "products")
low_stock = fetch(lambda: list_low_stock(api), "low stock products")

c1, c2, c3 = st.columns(3)
c1.metric("Categories", f"{len(categories)}")
c2.metric("Products", f"{len(products)}")
c3.metric("Low-stock variants", f"{len(low_stock)}")

st.info(
    "Use the left sidebar navigation. Start with **🗂️ Categories** and **🧩 Subcategories**, then add "
    "**👟 Products** and their **🎨 Product Variants**. If nothing loads, check the API URL in **⚙️ Settings**.",
    icon="ℹ️",
)
