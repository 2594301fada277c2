import math

EARTH_RADIUS_KM = 6378


def central_angle(lat1, lon1, lat2, lon2):
    """Great-circle angle between two points, in radians (haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_to_radians(distance_km):
    # d = r * theta
    return distance_km / EARTH_RADIUS_KM


def within_radius(lat, lon, center_lat, center_lon, radius_radians):
    return central_angle(lat, lon, center_lat, center_lon) <= radius_radians
