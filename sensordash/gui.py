"""
sensordash.gui
==============

Sensor dashboard – endpoint entry, radar sweep, IR & DHT charts

Key features
------------
• Endpoint field (host[:port]); ENTER or SET commits it to the session
• Half-disc radar: persistent echo per angle + live sweep line
• IR and Temperature/Humidity line charts over the last 20 readings,
  y-axes follow the ranges the session sets
• NIGHT / FULL_SCREEN toggles
• Live clock (bottom-right)
• Flashing red “DATA STREAM LOST” banner when an endpoint is set and no
  poll has succeeded for ≥1 s
"""

from __future__ import annotations
import math, time, datetime as dt, pygame
from typing import List, Optional, Tuple

from sensordash import charts, constants as C
from sensordash.poller import Poller
from sensordash.session import Session


class DashboardGUI:
    # ────────────────────────────────────────────────── INIT
    def __init__(self, cfg: dict, session: Optional[Session] = None) -> None:
        self.cfg = cfg

        # ―― Pygame window
        self.screen = pygame.display.set_mode(C.WIN_SIZE, pygame.RESIZABLE)
        pygame.display.set_caption("Sensor Dashboard")
        self.clock = pygame.time.Clock()
        self.full_screen = False

        # ―― Toggles
        self.night_mode = bool(cfg.get("night", False))

        # ―― Session & poller (timer runs from launch, polls are no-ops until
        #    an endpoint is committed)
        self.session = session if session is not None else Session()
        self.poller = Poller(self.session)
        self.poller.start()

        # ―― Endpoint field
        self.ep_text = str(cfg.get("endpoint", ""))
        self.ep_focus = not self.ep_text
        self.ep_rect = self.set_rect = pygame.Rect(0, 0, 0, 0)
        self.menu_rects = {}

        # ―― Timers & watchdog
        self.flash = True; self.t_flash = time.monotonic()
        self.t_endpoint = time.monotonic()
        self.data_lost = False

    # ───────────────────────────────────────── sync runtime→cfg
    def _sync_cfg(self):
        self.cfg.update(night=self.night_mode,
                        endpoint=self.session.endpoint or self.ep_text.strip())

    # ───────────────────────────────────────── endpoint commit
    def _commit_endpoint(self):
        if self.session.set_endpoint(self.ep_text):
            self.ep_text = self.session.endpoint
            self.ep_focus = False
            self.t_endpoint = time.monotonic()    # grace period for first poll
            self.data_lost = False
            self._sync_cfg()

    # ───────────────────────────────────────── layout
    def _panels(self) -> Tuple[pygame.Rect, pygame.Rect, pygame.Rect]:
        w, h = self.screen.get_size()
        pad = C.PANEL_PAD
        body = pygame.Rect(pad, C.HEADER_H, w - 2 * pad,
                           h - C.HEADER_H - C.FOOTER_H)
        left = pygame.Rect(body.x, body.y, body.w // 2 - pad // 2, body.h)
        rx = left.right + pad
        rw = body.right - rx
        top = pygame.Rect(rx, body.y, rw, body.h // 2 - pad // 2)
        bot = pygame.Rect(rx, top.bottom + pad, rw, body.bottom - top.bottom - pad)
        return left, top, bot

    # ───────────────────────────────────────── header: field + menu
    def _header(self):
        lbl = C.FONT.render("Endpoint:", True, C.GREEN)
        self.screen.blit(lbl, (C.PANEL_PAD, 18))

        self.ep_rect = pygame.Rect(C.PANEL_PAD + lbl.get_width() + 10, 12, 300, 30)
        pygame.draw.rect(self.screen, C.GREEN if self.ep_focus else C.DIM,
                         self.ep_rect, 2)
        txt = self.ep_text + (" ▌" if self.ep_focus and self.flash else "")
        self.screen.blit(C.FONT.render(txt, True, C.GREEN),
                         (self.ep_rect.x + 6, self.ep_rect.y + 5))

        self.set_rect = pygame.Rect(self.ep_rect.right + 10, 12, 60, 30)
        pygame.draw.rect(self.screen, C.GREEN, self.set_rect, 2)
        s = C.FONT.render("SET", True, C.GREEN)
        self.screen.blit(s, s.get_rect(center=self.set_rect.center))

        r, x, y = {}, self.screen.get_width() - 10, 18
        def add(label, key, col=C.GREEN):
            nonlocal x
            surf = C.FONT.render(label, True, col); rr = surf.get_rect(); rr.topright = (x, y)
            self.screen.blit(surf, rr); r[key] = rr; x = rr.left - 20
        add("EXIT_FULL" if self.full_screen else "FULL_SCREEN", "full")
        add("NIGHT", "night", C.RED if self.night_mode else C.GREEN)
        self.menu_rects = r

    # ───────────────────────────────────────── radar panel
    @staticmethod
    def _polar(cx, cy, radius_px, angle, dist) -> Tuple[float, float]:
        """0° at the left, clockwise over the top to 180° at the right."""
        th = math.radians(angle)
        r = dist / C.RADAR_R_MAX * radius_px
        return cx - math.cos(th) * r, cy - math.sin(th) * r

    def _draw_radar(self, rect: pygame.Rect):
        series, layout = self.session.sink.plot(charts.RADAR)
        pygame.draw.rect(self.screen, layout["bgcolor"], rect)
        pygame.draw.rect(self.screen, C.DIM, rect, 1)

        radius_px = min(rect.w // 2 - 30, rect.h - 60)
        cx, cy = rect.centerx, rect.bottom - 30
        grid = layout["radialaxis"]["gridcolor"]

        # dotted range rings + labels
        rad = layout["radialaxis"]
        for d in range(rad["tick0"] + rad["dtick"], rad["range"][1] + 1, rad["dtick"]):
            for a in range(0, C.RADAR_A_MAX + 1, 3):
                pygame.draw.circle(self.screen, grid,
                                   self._polar(cx, cy, radius_px, a, d), 1)
            lx, ly = self._polar(cx, cy, radius_px, 0, d)
            self.screen.blit(C.SMALL_FONT.render(str(d), True, C.WHITE), (lx - 8, ly + 4))

        # dotted spokes + angle labels
        ang = layout["angularaxis"]
        a = ang["tick0"]
        while a <= ang["range"][1]:
            for step in range(0, C.RADAR_R_MAX + 1, 4):
                pygame.draw.circle(self.screen, grid,
                                   self._polar(cx, cy, radius_px, a, step), 1)
            tx, ty = self._polar(cx, cy, radius_px, a, C.RADAR_R_MAX * 1.08)
            t = C.SMALL_FONT.render(f"{a:g}°", True, C.WHITE)
            self.screen.blit(t, t.get_rect(center=(tx, ty)))
            a += ang["dtick"]

        # point cloud
        pts, sweep = series
        for theta, r in zip(pts["theta"], pts["r"]):
            if 0 <= r <= C.RADAR_R_MAX:
                pygame.draw.circle(self.screen, pts["color"],
                                   self._polar(cx, cy, radius_px, theta, r),
                                   pts["size"])

        # sweep line
        ends = [self._polar(cx, cy, radius_px, th, r)
                for th, r in zip(sweep["theta"], sweep["r"])]
        pygame.draw.line(self.screen, sweep["color"], ends[0], ends[1], sweep["width"])

        self.screen.blit(C.MID_FONT.render(f"Radar  ({len(self.session.radar)} angles)",
                                           True, C.WHITE), (rect.x + 8, rect.y + 6))

    # ───────────────────────────────────────── line-chart panels
    @staticmethod
    def _y_range(layout: dict, axis: str, ys: List[float]) -> Tuple[float, float]:
        rng = layout.get(axis, {}).get("range")
        if rng:
            lo, hi = rng
        elif ys:
            lo, hi = min(ys), max(ys)
        else:
            lo, hi = 0.0, 1.0
        if hi - lo < 1e-9:
            lo, hi = lo - 1, hi + 1
        return lo, hi

    def _draw_lines(self, rect: pygame.Rect, plot_id: str):
        series, layout = self.session.sink.plot(plot_id)
        pygame.draw.rect(self.screen, C.PANEL_BG, rect)
        pygame.draw.rect(self.screen, C.DIM, rect, 1)

        area = pygame.Rect(rect.x + 60, rect.y + 32, rect.w - 120, rect.h - 64)
        pygame.draw.rect(self.screen, C.DIM, area, 1)

        t = C.MID_FONT.render(layout.get("title", ""), True, C.WHITE)
        self.screen.blit(t, t.get_rect(midtop=(rect.centerx, rect.y + 6)))
        xt = C.SMALL_FONT.render(layout["xaxis"]["title"], True, C.WHITE)
        self.screen.blit(xt, xt.get_rect(midtop=(area.centerx, area.bottom + 14)))

        for s in series:
            axis = s.get("yaxis", "yaxis")
            lo, hi = self._y_range(layout, axis, s["y"])
            right = layout.get(axis, {}).get("side") == "right"

            # axis labels (min / max) on this series' side
            for val, yy in ((hi, area.top), (lo, area.bottom)):
                lab = C.SMALL_FONT.render(f"{val:.1f}", True, s["color"])
                lr = lab.get_rect(midleft=(area.right + 6, yy)) if right \
                    else lab.get_rect(midright=(area.left - 6, yy))
                self.screen.blit(lab, lr)

            span_x = max(C.WINDOW_LEN - 1, 1)
            pts = [(area.left + x / span_x * area.w,
                    area.bottom - (y - lo) / (hi - lo) * area.h)
                   for x, y in zip(s["x"], s["y"])]
            pts = [(px, min(max(py, area.top), area.bottom)) for px, py in pts]
            if len(pts) > 1:
                pygame.draw.lines(self.screen, s["color"], False, pts, 2)
            elif pts:
                pygame.draw.circle(self.screen, s["color"], pts[0], 3)

        # legend
        x = area.left
        for s in series:
            lg = C.SMALL_FONT.render(s["name"], True, s["color"])
            self.screen.blit(lg, (x, rect.y + 8)); x += lg.get_width() + 14

    # ───────────────────────────────────────── footer
    def _footer(self):
        h = self.screen.get_height()
        ep = self.session.endpoint
        status = f"Polling {self.session.url}" if ep else "No endpoint set"
        if self.poller.last_error:
            status += f"  |  {self.poller.last_error}"
        self.screen.blit(C.SMALL_FONT.render(status, True, C.GREEN),
                         (C.PANEL_PAD, h - C.FOOTER_H + 12))
        clk = C.FONT.render(dt.datetime.now().strftime("%H:%M:%S"), True, C.GREEN)
        self.screen.blit(clk, (self.screen.get_width() - clk.get_width() - 10,
                               h - clk.get_height() - 10))

    # ───────────────────────────────────────── MAIN LOOP
    def run(self):
        running = True
        while running:
            self.clock.tick(30)
            if time.monotonic() - self.t_flash > 0.5:
                self.flash = not self.flash; self.t_flash = time.monotonic()

            # ――― EVENTS ―――――――――――――――――――――――――――――――――――――――――――
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    running = False

                elif e.type == pygame.VIDEORESIZE and not self.full_screen:
                    self.screen = pygame.display.set_mode(e.size, pygame.RESIZABLE)

                elif e.type == pygame.KEYDOWN:
                    if e.key == pygame.K_ESCAPE:
                        if self.ep_focus:
                            self.ep_focus = False
                        else:
                            running = False
                    elif e.key == pygame.K_F2:
                        pygame.display.toggle_fullscreen()
                        self.full_screen = not self.full_screen
                    elif e.key == pygame.K_F3:
                        self.night_mode = not self.night_mode; self._sync_cfg()
                    elif self.ep_focus:
                        if e.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                            self._commit_endpoint()
                        elif e.key == pygame.K_BACKSPACE:
                            self.ep_text = self.ep_text[:-1]
                        elif e.unicode and 32 <= ord(e.unicode) < 127:
                            self.ep_text += e.unicode

                elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    m = self.menu_rects
                    if self.ep_rect.collidepoint(e.pos):
                        self.ep_focus = True
                    elif self.set_rect.collidepoint(e.pos):
                        self._commit_endpoint()
                    elif m and m["full"].collidepoint(e.pos):
                        pygame.display.toggle_fullscreen()
                        self.full_screen = not self.full_screen
                    elif m and m["night"].collidepoint(e.pos):
                        self.night_mode = not self.night_mode; self._sync_cfg()
                    else:
                        self.ep_focus = False

            # ――― STREAM WATCHDOG ―――――――――――――――――――――――――
            if self.session.endpoint:
                last = max(self.poller.last_ok or 0.0, self.t_endpoint)
                self.data_lost = (time.monotonic() - last) > C.DATA_TIMEOUT_SEC

            # ――― DRAWING ――――――――――――――――――――――――――――――
            self.screen.fill(C.BLACK)
            self._header()
            radar_r, ir_r, dht_r = self._panels()
            self._draw_radar(radar_r)
            self._draw_lines(ir_r, charts.IR)
            self._draw_lines(dht_r, charts.DHT)
            self._footer()

            # data-loss banner
            if self.data_lost and self.flash:
                alert = C.BIG_FONT.render("DATA STREAM LOST", True, C.RED)
                ar = alert.get_rect(center=(self.screen.get_width() // 2,
                                            self.screen.get_height() // 2))
                self.screen.blit(alert, ar)

            if self.night_mode:
                ov = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
                ov.fill((255, 0, 0, 120)); self.screen.blit(ov, (0, 0))
            pygame.display.flip()

        # graceful shutdown
        self._sync_cfg()
        self.poller.stop()
        pygame.quit()
