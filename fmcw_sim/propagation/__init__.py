"""Free-space propagation of the chirp to a point target and back."""
from .pathloss import two_way_spreading_loss, two_way_spreading_loss_db, two_way_gain
from .echo import round_trip_delay, doppler_shift, fractional_delay, propagate

__all__ = [
    'two_way_spreading_loss', 'two_way_spreading_loss_db', 'two_way_gain',
    'round_trip_delay', 'doppler_shift', 'fractional_delay', 'propagate',
]
