"""Composição "over" em inteiros no domínio 0-255.

Todas as divisões são inteiras (truncam); a ordem das operações em
blend_channel define os bits menos significativos e precisa ser mantida
para que as imagens de referência sejam reproduzíveis.
"""
from mpilines.structs import Pixel


def blend_alpha(old_a, new_a):
    return old_a + new_a * (255 - old_a) // 255


def blend_channel(old_v, new_v, new_a):
    return new_v * new_a // 255 + old_v * (255 - new_a) // 255


def blend_pixel(old, new):
    # r, g, b usam a opacidade da cor nova; o alfa acumula
    return Pixel(
        blend_channel(old.r, new.r, new.a),
        blend_channel(old.g, new.g, new.a),
        blend_channel(old.b, new.b, new.a),
        blend_alpha(old.a, new.a),
    )
