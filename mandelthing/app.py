"""
Main application module for the MandelThing viewer.

Contains the MandelThingApp class which handles:
- Window setup and main loop
- User input (zoom box drag, Plot / Reset / About, keyboard)
- Displaying finished renders
- Interaction between the viewport controller, renderer and control bar
"""

import logging

import pygame

from . import __version__
from .colormaps import get_default_colormap
from .compute import warmup_jit
from .config import RenderConfig, parse_depth
from .errors import InvalidDepth
from .menu import ACTION_ABOUT, ACTION_PLOT, ACTION_RESET, BAR_HEIGHT, Menu
from .renderer import MandelbrotRenderer, render_image
from .viewport import ViewportController


logger = logging.getLogger(__name__)


TITLE = "MandelThing"


class MandelThingApp:
    """
    Main application class for the viewer.

    Handles the pygame window, event loop, and coordinates between the
    viewport controller, the renderer and the control bar.
    """

    ZOOM_BOX_COLOR = (255, 255, 255)

    def __init__(self, config, palette=None):
        """
        Initialize the application.

        Args:
            config: Validated RenderConfig with the startup size and depth
            palette: Palette array (default: blue ramp)
        """
        self.config = config.validate()
        self.default_depth = config.max_depth
        self.width = config.width
        self.height = config.height
        self.palette = palette if palette is not None else get_default_colormap()

        self.controller = ViewportController(self.width, self.height)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        # Components
        self.renderer = None
        self.menu = None

        # Display state
        self.current_surface = None
        self.dragging = False

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._init_components()
        self._warmup_and_initial_render()

        self.running = True
        while self.running:
            self._handle_events()
            self._check_render_result()
            self._draw()
            self.clock.tick(60)

        self.renderer.cancel()
        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height + BAR_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()

    def _init_components(self):
        """Initialize renderer and control bar."""
        self.renderer = MandelbrotRenderer(self.palette)
        self.menu = Menu(self.height, self.width, self.height + BAR_HEIGHT, self.config.max_depth)

    def _warmup_and_initial_render(self):
        """Warm up JIT and do the first plot synchronously."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(self.palette)

        result = render_image(self.controller.viewport, self.config, self.palette)
        self._show_result(result)
        pygame.display.flip()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue

            # Control bar gets first crack at events
            handled, action = self.menu.handle_event(event)
            if action is not None:
                self._do_action(action)
            if handled:
                continue

            if event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_mouse_down(event)
            elif event.type == pygame.MOUSEBUTTONUP:
                self._handle_mouse_up(event)
            elif event.type == pygame.MOUSEMOTION:
                self._handle_mouse_motion(event)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _do_action(self, action):
        if action == ACTION_PLOT:
            self.plot()
        elif action == ACTION_RESET:
            self.reset()
        elif action == ACTION_ABOUT:
            self.menu.show_message(
                "About",
                f"{TITLE} v{__version__}\n\nMandelbrot set explorer.\n"
                "Drag a box, then Plot to zoom."
            )

    def plot(self):
        """
        Render the current view, zooming into the pending box first.

        An invalid depth aborts before anything changes, so the previous
        image and the zoom box stay as they were.
        """
        try:
            max_depth = parse_depth(self.menu.depth_text)
        except InvalidDepth as e:
            logger.warning("Invalid parameters: %s", e)
            self.menu.show_message("Invalid Depth", str(e))
            return

        self.config = RenderConfig(self.width, self.height, max_depth)
        self.controller.apply_pending_selection()
        self._start_render()

    def reset(self):
        """Return to the default view and depth, then plot."""
        self.controller.reset()
        self.menu.set_depth(self.default_depth)
        self.plot()

    def _start_render(self):
        self.renderer.compute_async(self.controller.viewport, self.config)
        pygame.display.set_caption("Plotting...")

    def _handle_mouse_down(self, event):
        """Handle mouse button press on the image."""
        if event.button == 1 and event.pos[1] < self.height:
            self.dragging = True
            self.controller.begin_selection(event.pos)

    def _handle_mouse_up(self, event):
        """Handle mouse button release."""
        if event.button == 1 and self.dragging:
            self.dragging = False
            self.controller.end_selection()

    def _handle_mouse_motion(self, event):
        """Handle mouse movement (for the zoom box)."""
        if self.dragging:
            self.controller.update_selection(event.pos)

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            self.reset()
        elif event.key == pygame.K_RETURN or event.key == pygame.K_KP_ENTER:
            self.plot()
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _check_render_result(self):
        """Check if async render has completed."""
        result = self.renderer.get_result()
        if result is not None:
            self._show_result(result)

    def _show_result(self, result):
        self.current_surface = pygame.surfarray.make_surface(result.rgb.swapaxes(0, 1))
        pygame.display.set_caption(TITLE)

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))
        if self.current_surface is not None:
            self.screen.blit(self.current_surface, (0, 0))

        box = self.controller.visible_box
        if box is not None:
            pygame.draw.rect(
                self.screen, self.ZOOM_BOX_COLOR,
                pygame.Rect(box.left, box.top, box.width, box.height), 1
            )

        self.menu.draw(self.screen)
        pygame.display.flip()


def run(config, palette=None):
    """
    Run the viewer.

    Args:
        config: RenderConfig with the startup width, height and max depth
        palette: Palette array (default: blue ramp)
    """
    app = MandelThingApp(config, palette)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
