"""
Control bar for the MandelThing viewer.

A strip under the image with a "Max. Depth:" text field, Plot and Reset
buttons and an About button, plus the modal message box used for the
About text and for input errors.
"""

import pygame


BAR_HEIGHT = 25

BG_COLOR = (40, 40, 40)
BORDER_COLOR = (100, 100, 100)
TEXT_COLOR = (220, 220, 220)
LABEL_COLOR = (180, 180, 180)

# Actions reported by Menu.handle_event
ACTION_PLOT = 'plot'
ACTION_RESET = 'reset'
ACTION_ABOUT = 'about'


class TextInput:
    """A single-line text input field."""

    def __init__(self, x, y, width, height=21, initial_text="", max_length=9):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.text = initial_text
        self.max_length = max_length
        self.active = False
        self.cursor_pos = len(initial_text)
        self.cursor_visible = True
        self.cursor_timer = 0

    def get_rect(self):
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def set_text(self, text):
        self.text = text
        self.cursor_pos = len(text)

    def handle_event(self, event):
        """Returns (handled, submitted)."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            was_active = self.active
            self.active = self.get_rect().collidepoint(event.pos)
            return self.active or was_active, False

        if event.type == pygame.KEYDOWN and self.active:
            if event.key == pygame.K_BACKSPACE:
                if self.cursor_pos > 0:
                    self.text = self.text[:self.cursor_pos-1] + self.text[self.cursor_pos:]
                    self.cursor_pos -= 1
            elif event.key == pygame.K_DELETE:
                if self.cursor_pos < len(self.text):
                    self.text = self.text[:self.cursor_pos] + self.text[self.cursor_pos+1:]
            elif event.key == pygame.K_LEFT:
                self.cursor_pos = max(0, self.cursor_pos - 1)
            elif event.key == pygame.K_RIGHT:
                self.cursor_pos = min(len(self.text), self.cursor_pos + 1)
            elif event.key == pygame.K_HOME:
                self.cursor_pos = 0
            elif event.key == pygame.K_END:
                self.cursor_pos = len(self.text)
            elif event.key == pygame.K_RETURN or event.key == pygame.K_KP_ENTER:
                self.active = False
                return True, True
            elif event.unicode and event.unicode.isprintable() and len(self.text) < self.max_length:
                self.text = self.text[:self.cursor_pos] + event.unicode + self.text[self.cursor_pos:]
                self.cursor_pos += 1
            return True, False

        return False, False

    def draw(self, screen, font):
        rect = self.get_rect()

        bg_color = (60, 60, 70) if self.active else (50, 50, 55)
        pygame.draw.rect(screen, bg_color, rect)
        border_color = (100, 140, 180) if self.active else (80, 80, 80)
        pygame.draw.rect(screen, border_color, rect, 2 if self.active else 1)

        text_surface = font.render(self.text, True, TEXT_COLOR)
        text_rect = text_surface.get_rect()
        text_rect.centery = rect.centery
        text_rect.left = rect.left + 4
        screen.blit(text_surface, text_rect)

        if self.active:
            self.cursor_timer += 1
            if self.cursor_timer > 30:
                self.cursor_visible = not self.cursor_visible
                self.cursor_timer = 0
            if self.cursor_visible:
                cursor_x = text_rect.left + font.size(self.text[:self.cursor_pos])[0]
                pygame.draw.line(screen, TEXT_COLOR,
                                 (cursor_x, rect.top + 4), (cursor_x, rect.bottom - 4))


class Button:
    """A push button with a text label."""

    def __init__(self, x, y, width, height, label, action):
        self.rect = pygame.Rect(x, y, width, height)
        self.label = label
        self.action = action
        self.hovered = False

    def handle_event(self, event):
        """Returns the button's action if it was clicked, else None."""
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                return self.action
        return None

    def draw(self, screen, font):
        bg_color = (80, 80, 90) if self.hovered else (60, 60, 60)
        pygame.draw.rect(screen, bg_color, self.rect)
        pygame.draw.rect(screen, (120, 120, 120), self.rect, 1)
        text = font.render(self.label, True, TEXT_COLOR)
        screen.blit(text, text.get_rect(center=self.rect.center))


class MessageBox:
    """Modal box with a title and a few lines of text. Any click dismisses it."""

    def __init__(self, screen_width, screen_height):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.visible = False
        self.title = ""
        self.lines = []

    def show(self, title, message):
        self.title = title
        self.lines = message.split("\n")
        self.visible = True

    def hide(self):
        self.visible = False

    def handle_event(self, event):
        """Returns True if the event was consumed by the box."""
        if not self.visible:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN:
            self.hide()
            return True
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_ESCAPE, pygame.K_SPACE):
                self.hide()
            return True
        return event.type in (pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION)

    def draw(self, screen, font, small_font):
        if not self.visible:
            return

        width = min(self.screen_width - 20, 300)
        height = 50 + 18 * len(self.lines)
        rect = pygame.Rect(0, 0, width, height)
        rect.center = (self.screen_width // 2, self.screen_height // 2)

        pygame.draw.rect(screen, BG_COLOR, rect)
        pygame.draw.rect(screen, BORDER_COLOR, rect, 1)

        title = font.render(self.title, True, TEXT_COLOR)
        screen.blit(title, (rect.x + 10, rect.y + 8))
        y = rect.y + 32
        for line in self.lines:
            text = small_font.render(line, True, LABEL_COLOR)
            screen.blit(text, (rect.x + 10, y))
            y += 18


class Menu:
    """
    Control bar along the bottom of the window.

    Holds the depth field and the Plot / Reset / About buttons. The
    viewer reads depth_text when plotting; the bar itself never
    validates it.
    """

    def __init__(self, y, screen_width, screen_height, max_depth):
        self.y = y
        self.width = screen_width
        self.font = None
        self.small_font = None

        self.depth_input = TextInput(79, y + 2, 45, initial_text=str(max_depth))
        self.buttons = [
            Button(133, y + 1, 61, 23, 'Plot', ACTION_PLOT),
            Button(196, y + 1, 61, 23, 'Reset', ACTION_RESET),
            Button(screen_width - 27, y + 1, 25, 23, '(i)', ACTION_ABOUT),
        ]
        self.message_box = MessageBox(screen_width, screen_height)

    def init_fonts(self):
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 14)
        self.small_font = pygame.font.SysFont('Arial', 12)

    @property
    def depth_text(self):
        return self.depth_input.text

    def set_depth(self, max_depth):
        self.depth_input.set_text(str(max_depth))

    def show_message(self, title, message):
        self.message_box.show(title, message)

    def get_rect(self):
        return pygame.Rect(0, self.y, self.width, BAR_HEIGHT)

    def point_in_menu(self, pos):
        return self.get_rect().collidepoint(pos)

    def handle_event(self, event):
        """
        Handle a pygame event.
        Returns (handled, action) where action is one of the ACTION_*
        constants or None.
        """
        if self.message_box.handle_event(event):
            return True, None

        handled, submitted = self.depth_input.handle_event(event)
        if submitted:
            return True, ACTION_PLOT
        if handled and event.type == pygame.KEYDOWN:
            return True, None

        for button in self.buttons:
            action = button.handle_event(event)
            if action is not None:
                return True, action

        if event.type == pygame.MOUSEBUTTONDOWN and self.point_in_menu(event.pos):
            return True, None
        return False, None

    def draw(self, screen):
        if self.font is None:
            self.init_fonts()

        rect = self.get_rect()
        pygame.draw.rect(screen, BG_COLOR, rect)
        pygame.draw.line(screen, BORDER_COLOR, rect.topleft, rect.topright)

        label = self.small_font.render('Max. Depth:', True, LABEL_COLOR)
        screen.blit(label, label.get_rect(midleft=(4, rect.centery)))
        self.depth_input.draw(screen, self.small_font)

        for button in self.buttons:
            button.draw(screen, self.small_font)

        self.message_box.draw(screen, self.font, self.small_font)
