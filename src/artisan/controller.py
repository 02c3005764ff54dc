"""Application state controller for Artisan Studio.

The controller owns the single ``AppState`` snapshot and exposes the actions a
front end can trigger. Each action derives the next snapshot from the current
one and publishes it in one step. Actions that talk to collaborators (the
generation service, the gallery store, the authorization gate, a capture
source) catch every failure at the action boundary and turn it into ``error``
state or a logged warning; nothing propagates to the caller.

Pipeline
--------
    capture_from / handle_capture  ->  editing  (default style preselected)
    select_style                   ->  editing
    handle_generate                ->  result   (or error on the editing screen)
    save_to_gallery                ->  gallery  (or home, see save_destination)
    open_gallery_item              ->  gallery-detail
    delete_gallery_item            ->  gallery
    re_edit_item                   ->  editing

Usage Example
-------------
    controller = StateController(
        generation_client=GeminiGenerationClient(config, key_provider=gate.api_key),
        gallery_store=GalleryStore(JsonFileStorage(config.data_dir), config.gallery_key),
        gate=gate,
        config=config,
    )
    await controller.initialize()
    controller.handle_capture(photo_uri)
    await controller.handle_generate()
    controller.save_to_gallery()
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace

from artisan.core.config import ArtisanConfig, get_config
from artisan.core.errors import (
    CaptureUnavailableError,
    GenerationError,
    InvalidCredentialError,
    PersistenceWriteError,
)
from artisan.core.models import AppState, GalleryItem, View, new_item_id, now_ms
from artisan.core.styles import default_style, get_style, resolve_style
from artisan.services.authorization import AlwaysAuthorizedGate, AuthorizationGate
from artisan.services.capture import CaptureSource, capture_session
from artisan.services.gallery_store import GalleryStore
from artisan.services.generation import GenerationClient

logger = logging.getLogger(__name__)

INVALID_CREDENTIAL_MESSAGE = "Your API key was rejected. Please select a valid key to continue."
GENERIC_FAILURE_MESSAGE = "The curator encountered a technical difficulty."
CAPTURE_UNAVAILABLE_MESSAGE = "Please allow camera access to take photos."

Listener = Callable[[AppState], None]


class StateController:
    """Orchestrates navigation, generation and the gallery for one session.

    Attributes
    ----------
    state : AppState
        Current snapshot (replaced, never mutated, by every action)
    generation_client : GenerationClient
        Renders the captured photo in the selected style
    gallery_store : GalleryStore
        Persisted collection of saved results
    gate : AuthorizationGate
        Reports and grants access to the generation service
    config : ArtisanConfig
        Behaviour settings (``save_destination``)
    """

    def __init__(
        self,
        generation_client: GenerationClient,
        gallery_store: GalleryStore,
        gate: AuthorizationGate | None = None,
        config: ArtisanConfig | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.generation_client = generation_client
        self.gallery_store = gallery_store
        self.gate = gate or AlwaysAuthorizedGate()
        self.config = config or get_config()
        self.clock = clock
        self.state = AppState()
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Snapshot plumbing
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every published snapshot.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, **changes) -> bool:
        """Publish the current snapshot with ``changes`` applied.

        Returns:
            False if the resulting snapshot would break an invariant, in which
            case nothing is published
        """
        try:
            next_state = replace(self.state, **changes)
        except ValueError as e:
            logger.warning(f"Rejected state transition ({', '.join(changes)}): {e}")
            return False

        self.state = next_state
        for listener in list(self._listeners):
            try:
                listener(next_state)
            except Exception as e:
                logger.error(f"State listener failed: {e}", exc_info=True)
        return True

    async def _probe_access(self) -> bool:
        try:
            return bool(await self.gate.has_access())
        except Exception as e:
            logger.error(f"Authorization check failed: {e}", exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Startup and authorization
    # ------------------------------------------------------------------

    async def initialize(self) -> AppState:
        """Load the persisted gallery and probe the authorization gate."""
        authorized = await self._probe_access()
        gallery = self.gallery_store.load()

        self._transition(
            view=View.HOME,
            gallery=gallery,
            selected_gallery_item=None,
            authorized=authorized,
        )
        logger.info(f"Session ready: {len(gallery)} gallery items, authorized={authorized}")
        return self.state

    def set_authorized(self, authorized: bool) -> None:
        self._transition(authorized=authorized)

    async def request_access(self) -> None:
        """Run the gate's grant step, then reopen the application.

        The grant step cannot report which credential was picked, so access is
        assumed once it returns; a bad key is caught by the next generation.
        """
        try:
            await self.gate.grant_access()
        except Exception as e:
            logger.error(f"Access request failed: {e}", exc_info=True)
            return

        self._transition(authorized=True, error=None)

    # ------------------------------------------------------------------
    # Navigation and capture
    # ------------------------------------------------------------------

    def set_view(self, view: View | str) -> None:
        """Switch screens and clear the error.

        Switching to a screen whose data is missing (editing without an image,
        gallery-detail without a selected item) does nothing.
        """
        try:
            target = View(view)
        except ValueError:
            logger.warning(f"Ignoring unknown view: {view!r}")
            return

        self._transition(view=target, error=None)

    def handle_capture(self, image: str) -> None:
        """Accept a captured or imported photo and open the editing screen."""
        if not image:
            logger.warning("Ignoring empty capture")
            return
        if self.state.is_processing:
            logger.warning("Ignoring capture while a render is in progress")
            return

        self._transition(
            image=image,
            selected_style=default_style(),
            processed_image=None,
            view=View.EDITING,
            error=None,
        )

    async def capture_from(self, source: CaptureSource) -> None:
        """Show the camera screen and take one photo from ``source``.

        The source is released on every exit path. If it cannot be acquired
        the user is returned home with an error, as on any other capture
        failure. If the task running this action is cancelled the device is
        released and the user is returned home.
        """
        if not self._transition(view=View.CAMERA, error=None):
            return

        try:
            async with capture_session(source):
                image = await source.capture()
        except CaptureUnavailableError as e:
            logger.warning(f"Capture unavailable: {e}")
            self._transition(view=View.HOME, error=str(e) or CAPTURE_UNAVAILABLE_MESSAGE)
            return
        except asyncio.CancelledError:
            self._transition(view=View.HOME)
            raise
        except Exception as e:
            logger.error(f"Unexpected capture error: {e}", exc_info=True)
            self._transition(view=View.HOME, error=CAPTURE_UNAVAILABLE_MESSAGE)
            return

        if self.state.view != View.CAMERA:
            logger.info("Camera screen was left before the capture finished; discarding photo")
            return

        self.handle_capture(image)

    def cancel_capture(self) -> None:
        if self.state.view == View.CAMERA:
            self.set_view(View.HOME)

    def select_style(self, style_id: str) -> None:
        style = get_style(style_id)
        if style is None:
            logger.warning(f"Unknown style: {style_id}")
            return
        if self.state.is_processing:
            logger.warning("Ignoring style change while a render is in progress")
            return

        self._transition(selected_style=style)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def handle_generate(self) -> None:
        """Render the current photo in the selected style.

        Does nothing without a photo and a style, or while a render is already
        in flight. Failures leave the user on the editing screen with the photo
        and style intact so they can retry.
        """
        state = self.state
        if state.image is None or state.selected_style is None or state.is_processing:
            return

        image, style = state.image, state.selected_style
        self._transition(is_processing=True, error=None)

        try:
            if not await self._probe_access():
                logger.warning("Generation service not authorized; asking for access")
                self._transition(is_processing=False, authorized=False)
                return

            logger.info(f"Generating '{style.id}' rendering")
            result = await self.generation_client.generate(image, style.prompt)

        except InvalidCredentialError as e:
            logger.warning(f"Credential rejected: {e}")
            self._transition(
                is_processing=False, authorized=False, error=INVALID_CREDENTIAL_MESSAGE
            )
            return

        except GenerationError as e:
            logger.warning(f"Generation failed: {e}")
            self._transition(is_processing=False, error=str(e) or GENERIC_FAILURE_MESSAGE)
            return

        except asyncio.CancelledError:
            self._transition(is_processing=False)
            raise

        except Exception as e:
            logger.error(f"Unexpected generation error: {e}", exc_info=True)
            self._transition(is_processing=False, error=str(e) or GENERIC_FAILURE_MESSAGE)
            return

        self._transition(processed_image=result, view=View.RESULT, is_processing=False)

    # ------------------------------------------------------------------
    # Gallery
    # ------------------------------------------------------------------

    def save_to_gallery(self) -> None:
        """Save the current result and navigate to ``config.save_destination``."""
        state = self.state
        if not state.processed_image or not state.image or state.selected_style is None:
            return

        timestamp = self.clock()
        item = GalleryItem(
            id=new_item_id(timestamp),
            original_image=state.image,
            processed_image=state.processed_image,
            style_id=state.selected_style.id,
            timestamp=timestamp,
        )

        try:
            self.gallery_store.add(item)
        except PersistenceWriteError as e:
            logger.warning(f"Saved {item.id} for this session only: {e}")

        self._transition(
            gallery=self.gallery_store.all(),
            view=View(self.config.save_destination),
            error=None,
        )

    def open_gallery_item(self, item_id: str) -> None:
        item = self.gallery_store.get(item_id)
        if item is None:
            logger.warning(f"Gallery item not found: {item_id}")
            return

        self._transition(selected_gallery_item=item, view=View.GALLERY_DETAIL, error=None)

    def delete_gallery_item(self, item_id: str) -> None:
        """Remove an item from the gallery and return to the gallery screen."""
        try:
            self.gallery_store.remove(item_id)
        except PersistenceWriteError as e:
            logger.warning(f"Deleted {item_id} for this session only: {e}")

        selected = self.state.selected_gallery_item
        if selected is not None and selected.id == item_id:
            selected = None

        self._transition(
            gallery=self.gallery_store.all(),
            selected_gallery_item=selected,
            view=View.GALLERY,
        )

    def re_edit_item(self, item: GalleryItem) -> None:
        """Load a saved item's original photo and style back into the editor."""
        if self.state.is_processing:
            logger.warning("Ignoring re-edit while a render is in progress")
            return
        if get_style(item.style_id) is None:
            logger.warning(f"Item {item.id} uses unknown style '{item.style_id}'; using default")

        self._transition(
            image=item.original_image,
            selected_style=resolve_style(item.style_id),
            processed_image=None,
            view=View.EDITING,
            error=None,
        )
