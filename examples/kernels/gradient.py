# UV gradient with a pulsing blue channel.


def main_image(frag_x, frag_y, constants):
    u = frag_x / constants[RES_X]
    v = frag_y / constants[RES_Y]
    b = 0.5 + 0.5 * math.sin(constants[TIME])
    return u, v, b, 1.0
