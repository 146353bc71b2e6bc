import torch.utils.data as data

from .errors import InvalidWindowParamsError

class WindowDataset(data.Dataset):
    def __init__(self, x, y):
        if x.shape[0] != y.shape[0]:
            raise InvalidWindowParamsError(f"x has {x.shape[0]} windows but y has {y.shape[0]} targets")
        self.x = x
        self.y = y
    def __len__(self):
        return self.x.shape[0]
    def __getitem__(self, idx):
        return self.x[idx], self.y[idx]
