from __future__ import annotations

import streamlit as st

from storeadmin.config import configure_logging, get_settings

st.set_page_config(page_title="Store Admin", page_icon="🛍️", layout="wide")

configure_logging(get_settings().log_level)

pages = [
    st.Page("home.py", title="Home", icon="🏠"),
    st.Page("pages/1_🗂️_Categories.py", title="Categories", icon="🗂️"),
    st.Page("pages/2_🧩_Subcategories.py", title="Subcategories", icon="🧩"),
    st.Page("pages/3_👟_Products.py", title="Products", icon="👟"),
    st.Page("pages/4_🎨_Product_Variants.py", title="Product Variants", icon="🎨"),
    st.Page("pages/5_📦_Product_Stock.py", title="Product Stock", icon="📦"),
    st.Page("pages/6_🏷️_Coupons.py", title="Coupons", icon="🏷️"),
    st.Page("pages/7_🖼️_Banners.py", title="Banners", icon="🖼️"),
    st.Page("pages/8_👥_Customers.py", title="Customers", icon="👥"),
    st.Page("pages/9_🧾_Invoice.py", title="Invoice", icon="🧾"),
    st.Page("pages/10_⚙️_Settings.py", title="Settings", icon="⚙️"),
]

st.navigation(pages).run()
