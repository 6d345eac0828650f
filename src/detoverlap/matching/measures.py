"""Area overlap measures of a matched region pair."""


def compute_overlap_measures(intersection, gt_size, rec_size):
    """
    M1 = |gt ∩ rec| / |gt ∪ rec| * 100
    M2 = |gt ∩ rec| / |gt| * 100
    Dice = 2 |gt ∩ rec| / (|gt| + |rec|)
    """
    union = gt_size + rec_size - intersection

    m1 = intersection / union * 100
    m2 = intersection / gt_size * 100
    dice = 2.0 * intersection / (gt_size + rec_size)

    return m1, m2, dice
