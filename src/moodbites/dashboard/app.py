"""Gradio application: upload a photo, see numbered faces, analyze them."""

import logging

import gradio as gr
from PIL import Image

from moodbites.config import DEVICE
from moodbites.errors import DetectionUnavailable
from moodbites.inference.detector import InsightFaceDetector
from moodbites.inference.pipeline import FaceAttributePipeline, describe, load_context
from moodbites.inference.store import ModelStore

LOGGER = logging.getLogger(__name__)

TITLE = "MoodBites AI"
SUBTITLE = "Where emotions meet flavor, powered by AI."

CUSTOM_CSS = """
.title h1 { color: #A60616; text-align: center; font-weight: 900; }
.subtitle p { text-align: center; font-weight: 300; }
.result-card { border-left: 4px solid #A60616; padding-left: 12px; }
"""


def _results_markdown(lines: list[str]) -> str:
    """Render result lines as cards: bold face label, then its attributes."""
    blocks = []
    for line in lines:
        label, sep, detail = line.partition(":")
        if sep:
            blocks.append(f"**{label}**  \n{detail.strip()}")
        else:
            blocks.append(line)
    return "\n\n---\n\n".join(blocks)


def create_app(pipeline: FaceAttributePipeline | None = None) -> gr.Blocks:
    """Build the dashboard. Models are loaded once, when the app is created."""
    if pipeline is None:
        context = load_context(ModelStore(), device=DEVICE)
        pipeline = FaceAttributePipeline(context, InsightFaceDetector(device=DEVICE))

    async def _on_upload(image: Image.Image | None):
        if image is None:
            return None, None, gr.update(interactive=False), ""
        image = image.convert("RGB")
        try:
            annotated = await pipeline.annotate(image)
        except DetectionUnavailable as exc:
            LOGGER.warning("Annotation skipped: %s", exc)
            annotated = image
        return image, annotated, gr.update(interactive=True), ""

    async def _on_analyze(image: Image.Image | None) -> str:
        if image is None:
            return ""
        try:
            results = await pipeline.analyze(image)
        except DetectionUnavailable:
            return "No result: face detection unavailable."
        return _results_markdown(describe(results))

    with gr.Blocks(title=TITLE, css=CUSTOM_CSS) as app:
        gr.Markdown(f"# {TITLE}", elem_classes=["title"])
        gr.Markdown(SUBTITLE, elem_classes=["subtitle"])

        original_state = gr.State(None)
        upload = gr.Image(label="Upload Image", type="pil", sources=["upload"])
        annotated_image = gr.Image(label="Detected faces", type="pil", interactive=False)
        analyze_btn = gr.Button("Analyze", variant="primary", interactive=False)
        results = gr.Markdown(elem_classes=["result-card"])

        upload.change(
            fn=_on_upload,
            inputs=[upload],
            outputs=[original_state, annotated_image, analyze_btn, results],
        )
        analyze_btn.click(fn=_on_analyze, inputs=[original_state], outputs=[results])

    return app
