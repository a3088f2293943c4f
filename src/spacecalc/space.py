'''
Closed-form astrodynamics formulas.

Gravitational parameters (mu) are in km³/s² and radii in km throughout,
except for the rocket equation, which works in whatever consistent units it
is given.
'''

from collections import namedtuple
from types import MappingProxyType

import math

from .util import InputError


Body = namedtuple('Body', ['name', 'mu', 'radius'])

# Reference radius is the equatorial radius.
BODIES = MappingProxyType({
    body.name.lower(): body
    for body
    in [Body('Earth', 398600.4418, 6378.137),
        Body('Moon', 4902.800066, 1737.4),
        Body('Mars', 42828.375214, 3396.2),
        Body('Jupiter', 126686511, 71492),
        Body('Sun', 132712440018, 696340)]
})

Transfer = namedtuple('Transfer', ['dv1', 'dv2', 'total'])


def _positive(message, *values):
    if not all(value > 0 for value in values):
        raise InputError(message)


def delta_v(initial_mass, final_mass, exhaust_velocity):
    '''
    Tsiolkovsky rocket equation: ve ln(m0 / mf).
    '''
    _positive('Masses and exhaust velocity must be positive',
              initial_mass, final_mass, exhaust_velocity)
    if final_mass >= initial_mass:
        raise InputError('Final mass must be lower than initial mass')
    return exhaust_velocity * math.log(initial_mass / final_mass)


def orbital_velocity(mu, radius):
    '''
    Circular orbit velocity in km/s.
    '''
    _positive('μ and radius must be positive', mu, radius)
    return math.sqrt(mu / radius)


def escape_velocity(mu, radius):
    '''
    Escape velocity in km/s.
    '''
    _positive('μ and radius must be positive', mu, radius)
    return math.sqrt(2 * mu / radius)


def hohmann_transfer(mu, r1, r2):
    '''
    Burns for a Hohmann transfer between circular orbits r1 and r2, in km/s.

    Returns Transfer(dv1, dv2, total).
    '''
    _positive('μ and radii must be positive', mu, r1, r2)
    dv1 = abs(math.sqrt(mu / r1) * (math.sqrt(2 * r2 / (r1 + r2)) - 1))
    dv2 = abs(math.sqrt(mu / r2) * (1 - math.sqrt(2 * r1 / (r1 + r2))))
    return Transfer(dv1, dv2, dv1 + dv2)


def hohmann_transfer_time(mu, r1, r2):
    '''
    Time of flight of a Hohmann transfer in seconds: half the period of the
    transfer ellipse.
    '''
    _positive('μ and radii must be positive', mu, r1, r2)
    semi_major_axis = (r1 + r2) / 2
    return math.pi * math.sqrt(semi_major_axis ** 3 / mu)


def surface_gravity(mu, radius):
    '''
    Surface gravity in m/s².
    '''
    _positive('μ and radius must be positive', mu, radius)
    # km³/s² to m³/s², km to m
    return mu * 1e9 / (radius * 1000) ** 2
