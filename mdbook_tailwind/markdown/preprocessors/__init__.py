# mdbook_tailwind/markdown/preprocessors/__init__.py

from .utility_classes import utility_class_annotations_default

PREPROCESSORS = [
    utility_class_annotations_default,
    # Order matters - they run sequentially
]


def apply_preprocessors(text, context):
    """Apply all preprocessors in order"""
    for processor in PREPROCESSORS:
        text = processor(text, context)
    return text
