"""
Toolbar widgets for the Game of Life viewer

A Toolbar holds action buttons (Play/Pause, Toggle FPS) and one radio
group of preset buttons. Buttons wrap onto a new line when the window
is too narrow; the toolbar grows to fit.
"""

import pygame


THEME = {
    "bg": (18, 18, 24),
    "toolbar": (25, 25, 35),
    "text": (180, 185, 195),
    "text_bright": (230, 235, 245),
    "button": (40, 42, 55),
    "button_hover": (55, 58, 75),
    "button_active": (70, 100, 180),
    "divider": (40, 40, 55),
}

BUTTON_HEIGHT = 26
BUTTON_PADDING = 4
MARGIN = 8


def _label_width(label):
    return max(len(label) * 8 + 16, 50)


class Button:
    """Labelled rectangle that calls on_click on a left click."""

    def __init__(self, rect, label, on_click=None):
        self.rect = pygame.Rect(rect)
        self.label = label
        self.on_click = on_click
        self.active = False
        self.hovered = False

    def hit(self, pos):
        return self.rect.collidepoint(pos)

    def draw(self, surface, font):
        if self.active:
            fill = THEME["button_active"]
        elif self.hovered:
            fill = THEME["button_hover"]
        else:
            fill = THEME["button"]
        pygame.draw.rect(surface, fill, self.rect, border_radius=4)
        text = font.render(self.label, True, THEME["text_bright"])
        surface.blit(text, text.get_rect(center=self.rect.center))


class PresetGroup:
    """Radio group: exactly one button (or none, for custom grids) is lit."""

    def __init__(self, buttons, selected, on_select):
        self.buttons = buttons
        self.on_select = on_select
        self.selected = selected
        self.update_active()

    def update_active(self):
        for idx, btn in enumerate(self.buttons):
            btn.active = idx == self.selected

    def click(self, pos):
        for idx, btn in enumerate(self.buttons):
            if btn.hit(pos):
                self.selected = idx
                self.update_active()
                self.on_select(idx, btn.label)
                return True
        return False


class Toolbar:
    """Strip of buttons drawn across the top of the window."""

    def __init__(self, width):
        self.width = width
        self.buttons = []
        self._x = MARGIN
        self._y = MARGIN
        self.height = MARGIN + BUTTON_HEIGHT + MARGIN
        self._groups = []

    def _place(self, label, on_click=None):
        bw = _label_width(label)
        if self._x + bw > self.width - MARGIN and self._x > MARGIN:
            self._x = MARGIN
            self._y += BUTTON_HEIGHT + BUTTON_PADDING
            self.height = self._y + BUTTON_HEIGHT + MARGIN
        btn = Button((self._x, self._y, bw, BUTTON_HEIGHT), label, on_click)
        self.buttons.append(btn)
        self._x += bw + BUTTON_PADDING
        return btn

    def add_button(self, label, on_click=None):
        return self._place(label, on_click)

    def add_separator(self):
        self._x += 12

    def add_button_row(self, labels, selected=0, on_select=None):
        group = PresetGroup([self._place(label) for label in labels], selected,
                            on_select or (lambda idx, label: None))
        self._groups.append(group)
        return group

    def handle_event(self, event):
        """Returns True if the toolbar consumed the event."""
        if event.type == pygame.MOUSEMOTION:
            for btn in self.buttons:
                btn.hovered = btn.hit(event.pos)
            return False
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return False
        if event.pos[1] >= self.height:
            return False
        for group in self._groups:
            if group.click(event.pos):
                return True
        for btn in self.buttons:
            if btn.on_click and btn.hit(event.pos):
                btn.on_click()
                return True
        return False

    def draw(self, surface, font):
        pygame.draw.rect(surface, THEME["toolbar"], (0, 0, self.width, self.height))
        pygame.draw.line(surface, THEME["divider"],
                         (0, self.height - 1), (self.width, self.height - 1))
        for btn in self.buttons:
            btn.draw(surface, font)
