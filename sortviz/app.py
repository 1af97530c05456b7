import logging
import sys

import pygame

from .board import BarState
from .config import (WINDOW_WIDTH, WINDOW_HEIGHT, FPS, MIN_ARRAY_SIZE, MAX_ARRAY_SIZE,
                     MIN_SPEED, MAX_SPEED, BAR_MAX, UI_BG, UI_PANEL, UI_PANEL2,
                     UI_ACCENT, UI_TEXT, UI_SUBTEXT, UI_HOVER, UI_BORDER,
                     BAR_UNSORTED, BAR_COMPARING, BAR_SORTED,
                     load_settings, save_settings)
from .controller import SortController
from .engines import ENGINES
from .tones import TonePlayer

log = logging.getLogger(__name__)

# ============================================================
# ========================= LAYOUT CONSTANTS =================
# ============================================================

PAD      = 16
PANEL_H  = 150
VIEW_TOP = 56
VIEW_H   = WINDOW_HEIGHT - PANEL_H - VIEW_TOP - PAD
PANEL_Y  = WINDOW_HEIGHT - PANEL_H
COL_W    = (WINDOW_WIDTH - 4 * PAD) // 3
BTN_H    = 34

STATE_COLORS = {
    BarState.UNSORTED:  BAR_UNSORTED,
    BarState.COMPARING: BAR_COMPARING,
    BarState.SORTED:    BAR_SORTED,
}

# ============================================================
# ========================= UI WIDGETS =======================
# ============================================================

class Slider:
    """
    Horizontal value slider for the control panel.

    The knob position is the value's fraction of [lo, hi]. Values snap to
    `step` (whole numbers when `is_int`). A disabled slider ignores input
    and is drawn dimmed; handle() reports True once a drag is released.
    """
    KNOB = 6

    def __init__(self, x, y, w, lo, hi, val, label, is_int=False, step=None):
        self.lo, self.hi = lo, hi
        self.label   = label
        self.is_int  = is_int
        self.step    = 1 if is_int else step
        self.value   = val
        self.enabled = True
        self.dragging = False
        self.track = pygame.Rect(x, y + 18, w, 4)
        self.area  = pygame.Rect(x - 5, y, w + 10, 38)

    @property
    def fraction(self) -> float:
        return (self.value - self.lo) / (self.hi - self.lo)

    def value_at(self, px):
        f = max(0.0, min(1.0, (px - self.track.x) / self.track.width))
        raw = self.lo + f * (self.hi - self.lo)
        if self.step:
            raw = round(raw / self.step) * self.step
        return int(round(raw)) if self.is_int else round(raw, 1)

    def handle(self, ev) -> bool:
        if not self.enabled:
            self.dragging = False
            return False
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1 and self.area.collidepoint(ev.pos):
            self.dragging = True
            self.value = self.value_at(ev.pos[0])
        elif ev.type == pygame.MOUSEMOTION and self.dragging:
            self.value = self.value_at(ev.pos[0])
        elif ev.type == pygame.MOUSEBUTTONUP and self.dragging:
            self.dragging = False
            return True
        return False

    def draw(self, s, fonts):
        shown = str(self.value) if self.is_int else f"{self.value:.1f}x"
        fg    = UI_ACCENT if self.enabled else UI_BORDER
        s.blit(fonts['small'].render(f"{self.label}:  {shown}", True, UI_SUBTEXT),
               (self.track.x, self.area.y))
        pygame.draw.rect(s, UI_BORDER, self.track, border_radius=2)
        filled = self.track.copy()
        filled.width = int(self.fraction * self.track.width)
        if filled.width:
            pygame.draw.rect(s, fg, filled, border_radius=2)
        knob = (filled.right, self.track.centery)
        pygame.draw.circle(s, UI_PANEL2, knob, self.KNOB)
        pygame.draw.circle(s, fg, knob, self.KNOB, 2)


class Button:
    def __init__(self, x, y, w, h, label):
        self.rect = pygame.Rect(x, y, w, h); self.label = label

    def hit(self, pos):
        return self.rect.collidepoint(pos)

    def draw(self, s, fonts, act=False, hov=False, enabled=True):
        bg = UI_ACCENT if act else (UI_HOVER if hov and enabled else UI_PANEL2)
        fc = (0, 0, 0) if act else (UI_TEXT if enabled else UI_SUBTEXT)
        pygame.draw.rect(s, bg,        self.rect, border_radius=5)
        pygame.draw.rect(s, UI_BORDER, self.rect, 1, border_radius=5)
        t = fonts['small'].render(self.label, True, fc)
        s.blit(t, t.get_rect(center=self.rect.center))

# ============================================================
# ======================= BAR VIEW ===========================
# ============================================================

def draw_bars(s, values, states):
    area = pygame.Rect(PAD, VIEW_TOP, WINDOW_WIDTH - 2*PAD, VIEW_H)
    pygame.draw.rect(s, (0, 0, 0), area)
    n = len(values)
    if n == 0:
        return
    gap = 1 if n > 60 else 2
    bw  = max(1.0, (area.width - gap * (n - 1)) / n)
    top = max(values) or BAR_MAX
    for i, (v, st) in enumerate(zip(values, states)):
        h = v / top * area.height * 0.95
        x = area.x + i * (bw + gap)
        pygame.draw.rect(s, STATE_COLORS.get(st, BAR_UNSORTED),
                         (int(x), int(area.bottom - h), max(1, int(bw)), int(h)))

# ============================================================
# ===================== CONTROL PANEL ========================
# ============================================================

class ControlPanel:
    def __init__(self, settings):
        y = PANEL_Y + PAD
        x1, x2, x3 = PAD, 2*PAD + COL_W, 3*PAD + 2*COL_W
        self.sl_size  = Slider(x1, y, COL_W, MIN_ARRAY_SIZE, MAX_ARRAY_SIZE,
                               settings.size, "Array Size", is_int=True)
        self.sl_speed = Slider(x1, y + 52, COL_W, MIN_SPEED, MAX_SPEED,
                               settings.speed, "Speed", step=0.1)

        bw = (COL_W - 2*6) // 3
        self.algo_btns = [(Button(x2 + i*(bw+6), y + 14, bw, BTN_H, name), key)
                          for i, (key, (name, _)) in enumerate(ENGINES.items())]
        self.sound_btn = Button(x2, y + 14 + BTN_H + 12, COL_W, BTN_H, "")

        hw = (COL_W - 6) // 2
        self.rand_btn  = Button(x3, y + 14, COL_W, BTN_H, "Randomize Array")
        self.start_btn = Button(x3, y + 14 + BTN_H + 12, hw, BTN_H, "> Start")
        self.stop_btn  = Button(x3 + hw + 6, y + 14 + BTN_H + 12, hw, BTN_H, "Stop")

        self.algorithm = settings.algorithm
        self.sound_on  = settings.sound

    def handle(self, ev, sorting):
        """Returns the action the event asks for, or None."""
        # resizing reloads the board, so it waits until the sort is over
        self.sl_size.enabled = not sorting
        if self.sl_size.handle(ev):
            return "randomize"
        self.sl_speed.handle(ev)

        if ev.type != pygame.MOUSEBUTTONDOWN or ev.button != 1:
            return None
        for b, key in self.algo_btns:
            if b.hit(ev.pos) and not sorting:
                self.algorithm = key
                return "select"
        if self.sound_btn.hit(ev.pos):
            self.sound_on = not self.sound_on
            return "sound"
        if self.rand_btn.hit(ev.pos) and not sorting:
            return "randomize"
        if self.start_btn.hit(ev.pos) and not sorting:
            return "start"
        if self.stop_btn.hit(ev.pos) and sorting:
            return "stop"
        return None

    def draw(self, s, fonts, sorting):
        mp = pygame.mouse.get_pos()
        panel = pygame.Rect(0, PANEL_Y, WINDOW_WIDTH, PANEL_H)
        pygame.draw.rect(s, UI_PANEL, panel)
        pygame.draw.line(s, UI_BORDER, (0, PANEL_Y), (WINDOW_WIDTH, PANEL_Y), 1)

        self.sl_size.enabled = not sorting
        self.sl_size.draw(s, fonts)
        self.sl_speed.draw(s, fonts)

        s.blit(fonts['small'].render("Algorithm", True, UI_SUBTEXT),
               (self.algo_btns[0][0].rect.x, PANEL_Y + PAD - 2))
        for b, key in self.algo_btns:
            b.draw(s, fonts, key == self.algorithm, b.hit(mp), not sorting)

        self.sound_btn.label = "Sound: ON" if self.sound_on else "Sound: OFF"
        self.sound_btn.draw(s, fonts, self.sound_on, self.sound_btn.hit(mp))

        self.rand_btn.draw(s, fonts, False, self.rand_btn.hit(mp), not sorting)
        self.start_btn.draw(s, fonts, False, self.start_btn.hit(mp), not sorting)
        self.stop_btn.draw(s, fonts, sorting, self.stop_btn.hit(mp), sorting)

    def settings(self, current):
        current.size      = self.sl_size.value
        current.speed     = self.sl_speed.value
        current.algorithm = self.algorithm
        current.sound     = self.sound_on
        return current

# ============================================================
# ========================= MAIN =============================
# ============================================================

def build_fonts():
    def tf(names, sz):
        for n in names:
            try: return pygame.font.SysFont(n, sz)
            except (OSError, pygame.error): pass
        return pygame.font.SysFont(None, sz)
    mono = ["Consolas", "Courier New", "Lucida Console"]
    sans = ["Segoe UI", "Tahoma", "Arial"]
    return dict(title=tf(mono, 26), small=tf(sans, 13), mono_sm=tf(mono, 12))


def draw_header(s, fonts, ctl):
    t = fonts['title'].render("Sorting Visualizer", True, UI_TEXT)
    s.blit(t, (PAD, 14))
    name = ENGINES[ctl.algorithm][0]
    status = "sorting" if ctl.is_sorting else ("sorted" if ctl.result is not None else "idle")
    info = fonts['mono_sm'].render(f"{name}  |  {len(ctl.board)} values  |  {status}",
                                   True, UI_SUBTEXT)
    s.blit(info, (PAD + t.get_width() + 16, 24))


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings()

    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption("Sorting Visualizer")
    fonts = build_fonts(); clock = pygame.time.Clock()

    tones = TonePlayer(enabled=settings.sound, max_value=BAR_MAX)
    tones.start()
    if not tones.available:
        log.info("running without sound")

    ctl = SortController(algorithm=settings.algorithm)
    ctl.add_listener(tones.on_step)
    ctl.randomize(settings.size)
    panel = ControlPanel(settings)

    running = True
    while running:
        clock.tick(FPS)
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                running = False
            else:
                action = panel.handle(ev, ctl.is_sorting)
                if action == "randomize":
                    ctl.randomize(panel.sl_size.value)
                elif action == "select":
                    ctl.select(panel.algorithm)
                elif action == "sound":
                    tones.set_enabled(panel.sound_on)
                elif action == "start":
                    ctl.start(panel.sl_speed.value)
                elif action == "stop":
                    ctl.stop()

        # speed changes apply to the running sort as well
        ctl.speed = panel.sl_speed.value

        values, states = ctl.board.snapshot()
        screen.fill(UI_BG)
        draw_header(screen, fonts, ctl)
        draw_bars(screen, values, states)
        panel.draw(screen, fonts, ctl.is_sorting)
        pygame.display.flip()

    ctl.stop()
    tones.stop()
    save_settings(panel.settings(settings))
    pygame.quit()
    sys.exit()
