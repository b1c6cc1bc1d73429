#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/app.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses
import logging
import math
import time

from .camera import Camera, FrameStats
from .color import hex_to_unit_rgb, init_colors
from .config import RenderConfig
from .math_utils import Mat4, Vec3
from .mesh import Mesh
from .physics import Inertial
from .screen import CursesCanvas

logger = logging.getLogger(__name__)

# How much spin one keypress adds, in radians per second
ROTATION_PER_SEC = math.pi
# How much forward speed one keypress adds, in world units per second
DOLLY_PER_SEC = 2.0


class App:
    """
    Interactive viewer: polls one key per tick, advances the mesh and
    camera motion, renders a frame and sleeps until the next tick.
    """

    def __init__(self, stdscr, args):
        self.stdscr = stdscr
        self.running = True
        self.fps_target = max(1.0, float(args.fps))

        curses.curs_set(0)

        # ── RenderConfig from terminal detection + CLI overrides ────────
        config = RenderConfig.detect_terminal()
        if args.no_color:
            config.use_color = False
        if args.no_zbuffer:
            config.use_zbuffer = False
        if args.flat:
            config.interpolate_colors = False
        if args.linear_levels:
            config.perceptual_levels = False
        if args.no_border:
            config.show_border = False
        self.config = config

        # ── Palette: registered once, valid for the whole session ───────
        pairs = init_colors(config.palette, config.use_color)

        # ── Surface below the one-line HUD ──────────────────────────────
        th, tw = stdscr.getmaxyx()
        rows = min(args.rows or th - 1, th - 1)
        cols = min(args.cols or tw, tw)
        if rows <= 0 or cols <= 0:
            raise ValueError(f"terminal too small ({th}x{tw})")
        self.hud = curses.newwin(1, tw, 0, 0)
        self.surface = CursesCanvas.create(rows, cols, pairs, config, top=1)
        self.surface.window.keypad(True)
        self.surface.window.nodelay(True)

        # ── Mesh ────────────────────────────────────────────────────────
        if args.model:
            default_color = hex_to_unit_rgb(args.color)
            self.mesh = Mesh.from_file(args.model, index_base=args.index_base,
                                       default_color=default_color)
        elif args.demo == 'cube':
            self.mesh = Mesh.cube()
        else:
            self.mesh = Mesh.pyramid()

        # ── Camera away from the origin, looking at it; world up is +z ──
        self.camera = Camera(rows, cols, math.radians(args.fov),
                             surface=self.surface, config=config)
        self.camera.transform(Mat4.translation(args.distance, 0.0, 0.0))
        self.camera.look_at(Vec3(0.0, 0.0, 0.0))

        self.mesh_motion = Inertial(ang_friction=0.9)
        self.camera_motion = Inertial(pos_friction=0.8)
        self._spin = Vec3(0.0, 0.0, 0.0)
        self._push = Vec3(0.0, 0.0, 0.0)

        self.stats = FrameStats(0, 0, 0)
        self.frame_count = 0
        self.fps = 0
        self.last_fps_time = time.monotonic()

        logger.info("viewer started: %dx%d grid, %r, %r", rows, cols, self.mesh, config)

    def handle_keystroke(self, key: int) -> bool:
        """Queue the motion for one key. Returns False to quit."""
        spin = ROTATION_PER_SEC / self.fps_target
        push = DOLLY_PER_SEC / self.fps_target
        config = self.config

        if key == ord('q'):
            return False
        elif key in (ord('a'), curses.KEY_LEFT):
            self._spin = self._spin + Vec3(0.0, 0.0, -spin)
        elif key in (ord('d'), curses.KEY_RIGHT):
            self._spin = self._spin + Vec3(0.0, 0.0, spin)
        elif key in (ord('w'), curses.KEY_UP):
            self._spin = self._spin + self.camera.right * spin
        elif key in (ord('s'), curses.KEY_DOWN):
            self._spin = self._spin - self.camera.right * spin
        elif key in (ord('+'), ord('=')):
            self._push = self._push + self.camera.forward * push
        elif key == ord('-'):
            self._push = self._push - self.camera.forward * push
        elif key == ord('z'):
            config.use_zbuffer = not config.use_zbuffer
        elif key == ord('i'):
            config.interpolate_colors = not config.interpolate_colors
        elif key == ord('r'):
            self.surface.window.redrawwin()
        return True

    def step(self):
        """Advance mesh and camera motion by one tick."""
        self.mesh.transform(self.mesh_motion.update(delta_angular_velocity=self._spin))
        self.camera.transform(self.camera_motion.update(delta_velocity=self._push))
        self._spin = Vec3(0.0, 0.0, 0.0)
        self._push = Vec3(0.0, 0.0, 0.0)

    def draw_hud(self, frame_ms: float):
        config = self.config
        modestr = (f"{'Z+' if config.use_zbuffer else 'Z-'} "
                   f"{'LERP' if config.interpolate_colors else 'FLAT'}")
        hdr = (f" V:{self.mesh.vertex_count} F:{self.mesh.face_count}"
               f" | drawn:{self.stats.faces_drawn} behind:{self.stats.faces_skipped}"
               f" | FPS:{self.fps} | {frame_ms:.1f}ms | [{modestr}] ")
        _, tw = self.hud.getmaxyx()
        self.hud.erase()
        self.hud.addstr(0, 0, hdr.center(tw - 1, '=')[:tw - 1], curses.A_BOLD)
        self.hud.noutrefresh()

    def run(self):
        frame_interval = 1.0 / self.fps_target
        window = self.surface.window

        while self.running:
            t_frame = time.monotonic()

            if not self.handle_keystroke(window.getch()):
                self.running = False
                break

            self.step()
            self.stats = self.camera.render(self.mesh)

            self.frame_count += 1
            now = time.monotonic()
            if now - self.last_fps_time >= 1.0:
                self.fps = self.frame_count
                self.frame_count = 0
                self.last_fps_time = now

            self.draw_hud((now - t_frame) * 1000)
            curses.doupdate()

            # drop queued keystrokes so they do not pile up
            curses.flushinp()

            remaining = frame_interval - (time.monotonic() - t_frame)
            if remaining > 0:
                time.sleep(remaining)

        logger.info("viewer stopped")


def main(stdscr, args):
    """Entry point called from curses.wrapper."""
    app = App(stdscr, args)
    app.run()
