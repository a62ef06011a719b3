from pathtracer.output.image_writer import save_image, save_png, write_ppm

__all__ = ["save_image", "save_png", "write_ppm"]
