# preview.py
import numpy as np
import pygame

from pathtracer.renderer.tone_mapping import to_uint8


def image_to_surface(image: np.ndarray) -> pygame.Surface:
    """
    Convert a (height, width, 3) [0, 1] image into a pygame surface.
    pygame indexes surfaces as (x, y), hence the axis swap.
    """
    return pygame.surfarray.make_surface(to_uint8(image).swapaxes(0, 1))


def show_image(image: np.ndarray, caption: str = "pathtracer"):
    """
    Display a finished render in a window until it is closed or Escape is pressed.
    """
    pygame.init()
    try:
        height, width, _ = image.shape
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(caption)
        screen.blit(image_to_surface(image), (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()
