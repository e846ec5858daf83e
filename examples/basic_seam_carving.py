"""
Basic seam carving example.

Shows the energy map used to pick seams, overlays the removed seams on
the original image, and optionally writes a GIF of the carving steps.

    python basic_seam_carving.py photo.ppm 60 --gif carving.gif
"""

import argparse
import sys
sys.path.insert(0, '..')

import torch
import numpy as np
from PIL import Image
import matplotlib.pyplot as plt

from seamcarve import (apply_filters, intensity_map, carve_seams, load_image,
                       save_image)


def to_pil(tensor: torch.Tensor) -> Image.Image:
    img_array = tensor.permute(1, 2, 0).cpu().numpy()
    return Image.fromarray((img_array * 255).clip(0, 255).astype(np.uint8))


def seam_overlay(image: torch.Tensor, seams) -> torch.Tensor:
    """
    Paint removed seams red on the original image.

    Each seam is expressed in the coordinates of the grid it was removed
    from, so columns are mapped back through the ones removed before it.
    """
    C, H, W = image.shape
    img_vis = image.clone()
    # original column index of every surviving cell, per row
    remaining = [list(range(W)) for _ in range(H)]

    for seam in seams:
        for i, col in enumerate(seam.tolist()):
            original_col = remaining[i].pop(col)
            img_vis[:, i, original_col] = torch.tensor([1.0, 0.0, 0.0],
                                                       device=image.device)
    return img_vis


def main():
    parser = argparse.ArgumentParser(description="Seam carving demo")
    parser.add_argument('input', type=str, help='Input image')
    parser.add_argument('columns', type=int, help='Columns to remove')
    parser.add_argument('--gif', type=str, help='Write a GIF of every step')
    parser.add_argument('--fps', type=int, default=10,
                        help='Frames per second for the GIF (default: 10)')
    args = parser.parse_args()

    device = 'cuda' if torch.cuda.is_available() else 'cpu'
    print(f"Using device: {device}")

    image = load_image(args.input, device=device)
    C, H, W = image.shape
    print(f"Image shape: {C} x {H} x {W}")

    print("Computing energy...")
    energy = intensity_map(apply_filters(image))

    seams_so_far = []
    frames = []

    def record(step, seam):
        seams_so_far.append(seam)
        if args.gif:
            frames.append(to_pil(seam_overlay(image, seams_so_far)))
        if (step + 1) % 20 == 0:
            print(f"  Removed {step + 1}/{args.columns} seams")

    print(f"Carving image (removing {args.columns} seams)...")
    carved, seams = carve_seams(image, args.columns, callback=record)
    save_image(carved, 'carved.ppm')

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    axes[0].imshow(energy.cpu().numpy(), cmap='magma')
    axes[0].set_title('Energy')
    axes[1].imshow(seam_overlay(image, seams).permute(1, 2, 0).cpu().numpy())
    axes[1].set_title(f'{len(seams)} removed seams')
    axes[2].imshow(carved.permute(1, 2, 0).cpu().numpy())
    axes[2].set_title(f'Carved ({W} -> {carved.shape[2]})')
    for ax in axes:
        ax.axis('off')
    plt.tight_layout()
    plt.savefig('seam_carving.png', dpi=120)
    print("Saved: seam_carving.png")

    if args.gif and frames:
        duration = int(1000 / args.fps)
        frames[0].save(args.gif, save_all=True, append_images=frames[1:],
                       duration=duration, loop=0)
        print(f"Saved: {args.gif} ({len(frames)} frames)")


if __name__ == '__main__':
    main()
