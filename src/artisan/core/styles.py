"""Static catalog of artistic styles.

Each style pairs a display name with the instruction sent to the generation
service. The catalog is fixed at import time; the first entry is the default
style applied to every freshly captured photo.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ArtStyle:
    """A named style descriptor driving the generation instruction."""

    id: str
    name: str
    description: str
    prompt: str
    preview_url: str


ART_STYLES: tuple[ArtStyle, ...] = (
    ArtStyle(
        id="renaissance",
        name="Renaissance Master",
        description="Classic oil painting with dramatic sfumato and anatomical precision.",
        prompt=(
            "Transform this photo into a High Renaissance oil painting masterpiece, similar to "
            "the works of Leonardo da Vinci or Raphael. Use sfumato technique for soft "
            "transitions, realistic textures, warm museum-quality chiaroscuro lighting, and "
            "classic artistic composition. High fidelity, 8k resolution, oil on canvas texture."
        ),
        preview_url="https://images.unsplash.com/photo-1578301978693-85fa9c0320b9?q=80&w=400",
    ),
    ArtStyle(
        id="impressionist",
        name="Impressionist Sun",
        description="Vibrant visible brushstrokes and emphasis on the shifting quality of light.",
        prompt=(
            "Transform this image into a late 19th-century impressionist masterpiece. Use heavy, "
            "visible, expressive brushstrokes and a vibrant color palette, reminiscent of Claude "
            "Monet. Capture the ephemeral play of light and atmosphere. High artistic fidelity, "
            "thick impasto textures."
        ),
        preview_url="https://images.unsplash.com/photo-1579783902614-a3fb3927b6a5?q=80&w=400",
    ),
    ArtStyle(
        id="surrealist",
        name="Surrealist Dream",
        description="Dreamlike imagery and impossible arrangements of reality.",
        prompt=(
            "Transform this image into a surrealist dreamscape inspired by Salvador Dalí. "
            "Incorporate melting forms, impossible geometry, and ethereal, haunting lighting. "
            "Sharp focus amidst a landscape of dreams. High resolution, meticulously detailed."
        ),
        preview_url="https://images.unsplash.com/photo-1549490349-8643362247b5?q=80&w=400",
    ),
    ArtStyle(
        id="charcoal",
        name="Fine Charcoal",
        description="Sophisticated monochromatic hand-drawn sketch with deep contrast.",
        prompt=(
            "A museum-quality fine charcoal and graphite drawing on heavy textured archival "
            "paper. Features realistic shading, intricate cross-hatching, and dramatic "
            "high-contrast lighting. Hand-drawn artistic imperfections, smudged shadows, "
            "fine-art sketch."
        ),
        preview_url="https://images.unsplash.com/photo-1541535881962-3bb380b08458?q=80&w=400",
    ),
    ArtStyle(
        id="cyberpunk",
        name="Neo-Noir Digital",
        description="Neon-infused digital masterpiece from a high-tech future.",
        prompt=(
            "Reimagine this photo as a futuristic cyberpunk digital art piece. Neon-noir "
            "lighting, rainy atmosphere with realistic reflections, holographic elements, and "
            "high-tech intricate details. Cinematic lighting, octane render style, vibrant cyan "
            "and magenta palette."
        ),
        preview_url="https://images.unsplash.com/photo-1614728263952-84ea256f9679?q=80&w=400",
    ),
    ArtStyle(
        id="sculpture",
        name="Classical Marble",
        description="Carved white marble sculpture with dramatic studio lighting.",
        prompt=(
            "Transform the subject of this photo into a classical Roman marble sculpture. "
            "Smooth white Carrara marble texture with subtle veins, dramatic side lighting "
            "creating deep shadows, carved with incredible detail and anatomical realism. Set "
            "against a dark, minimalist museum background."
        ),
        preview_url="https://images.unsplash.com/photo-1554188248-986adbb73be4?q=80&w=400",
    ),
)

_STYLES_BY_ID = {style.id: style for style in ART_STYLES}


def default_style() -> ArtStyle:
    """Style preselected after a capture."""
    return ART_STYLES[0]


def get_style(style_id: str) -> ArtStyle | None:
    """Look up a style by id.

    Returns:
        The matching style, or None if the id is not in the catalog
    """
    return _STYLES_BY_ID.get(style_id)


def resolve_style(style_id: str) -> ArtStyle:
    """Look up a style by id, falling back to the default.

    Saved gallery items keep a plain style id, so an item saved under an older
    catalog may reference a style that no longer exists.
    """
    return _STYLES_BY_ID.get(style_id) or default_style()
