# Classic sine plasma; heavier per-pixel work than gradient.py.


def main_image(frag_x, frag_y, constants):
    t = constants[TIME]
    x = frag_x / constants[RES_Y] * 8.0
    y = frag_y / constants[RES_Y] * 8.0

    v = math.sin(x + t)
    v += math.sin((y + t) * 0.5)
    v += math.sin((x + y + t) * 0.5)
    cx = x + 0.5 * math.sin(t / 5.0)
    cy = y + 0.5 * math.cos(t / 3.0)
    v += math.sin(math.sqrt(cx * cx + cy * cy + 1.0) + t)
    v *= 0.5

    r = 0.5 + 0.5 * math.sin(math.pi * v)
    g = 0.5 + 0.5 * math.cos(math.pi * v)
    b = 0.5 + 0.5 * math.sin(math.pi * v + 2.0 * math.pi / 3.0)
    return r, g, b, 1.0
