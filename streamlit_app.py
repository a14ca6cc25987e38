"""
Pixel Art - interactive front-end

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
import time

import numpy as np
import streamlit as st
from PIL import Image

from pixel_art.config import PixelArtConfig
from pixel_art.image_io import palette_swatch
from pixel_art.pipeline import transform
from pixel_art.resample import SizeError

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Pixel Art",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = PixelArtConfig()

# -- CSS ---------------------------------------------------------------
st.markdown("""
<style>
    .block-container {
        max-width: 1000px;
        padding-top: 3rem;
        padding-bottom: 4rem;
    }
    .app-title {
        font-size: 2.4rem;
        font-weight: 300;
        letter-spacing: 0.06em;
        text-align: center;
        border-bottom: 1px solid #1a1a1a;
        padding-bottom: 0.6rem;
        margin-bottom: 0.5rem;
    }
    .label-detail {
        font-size: 0.85rem;
        font-style: italic;
        color: #a0a09a;
        text-align: center;
        margin-bottom: 0.8rem;
    }
    /* keep pixel blocks crisp when the browser scales previews */
    img { image-rendering: pixelated; }
</style>
""", unsafe_allow_html=True)

# -- Title -------------------------------------------------------------
st.markdown('<div class="app-title">Pixel Art</div>', unsafe_allow_html=True)
st.caption(
    "Upload an image. It is pixelated, a palette is extracted with k-means "
    "and reduced to 15-bit colour, and every pixel is repainted with its "
    "nearest palette colour."
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2, ctrl3 = st.columns(3)
with ctrl1:
    factor = st.slider("Pixelation factor", 1, 32, _DEFAULTS.pixelation_factor)
with ctrl2:
    num_colors = st.slider("Colours", 1, 128, _DEFAULTS.num_colors)
with ctrl3:
    transparent = st.toggle(
        "Sample transparent pixels", value=_DEFAULTS.transparent,
    )

uploaded = st.file_uploader(
    "Select image", type=["jpg", "jpeg", "png", "webp", "bmp", "jfif"],
)

if uploaded is None:
    st.markdown(
        '<div class="label-detail">Select an image to begin.</div>',
        unsafe_allow_html=True,
    )
    st.stop()

original = Image.open(io.BytesIO(uploaded.getvalue())).convert("RGBA")
cfg = PixelArtConfig(
    pixelation_factor=factor,
    num_colors=num_colors,
    transparent=transparent,
)

t0 = time.perf_counter()
try:
    result = transform(np.array(original, dtype=np.uint8), cfg)
except SizeError as exc:
    st.error(str(exc))
    st.stop()
elapsed = time.perf_counter() - t0

h, w = result.image.shape[:2]
output = Image.fromarray(result.image)
st.image(output, use_container_width=True)

buf = io.BytesIO()
output.save(buf, format="PNG")
_, dl_col, _ = st.columns([1, 2, 1])
with dl_col:
    st.download_button(
        "SAVE PNG",
        data=buf.getvalue(),
        file_name="pixel_art.png",
        mime="image/png",
        use_container_width=True,
    )

m1, m2, m3 = st.columns(3)
m1.metric("Resolution", f"{w} × {h}")
m2.metric("Colours", f"{len(result.palette)} / {num_colors}")
m3.metric("Time", f"{elapsed:.2f} s")

# -- Stages ------------------------------------------------------------
doc1, doc2, doc3 = st.columns(3)
with doc1:
    st.image(original, use_container_width=True)
    st.markdown('<div class="label-detail">Source</div>', unsafe_allow_html=True)
with doc2:
    st.image(Image.fromarray(result.pixelated), use_container_width=True)
    st.markdown(
        f'<div class="label-detail">Pixelated, factor {factor}</div>',
        unsafe_allow_html=True,
    )
with doc3:
    st.image(palette_swatch(result.palette, block=16), use_container_width=True)
    st.markdown(
        f'<div class="label-detail">{len(result.palette)} colour palette</div>',
        unsafe_allow_html=True,
    )
