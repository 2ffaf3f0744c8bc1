"""
Entry-point.  Keeps top-level script tiny.
"""
import pygame
from sensordash import config, gui, logs

def main():
    logs.setup()
    cfg = config.load()
    logs.setup(cfg["log_level"])
    pygame.init()
    app = gui.DashboardGUI(cfg)
    app.run()
    config.save(cfg)

if __name__ == "__main__":
    main()
