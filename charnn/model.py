import torch.nn as nn

class Architecture(nn.Module):
    """Single-layer LSTM over one-hot characters -> Linear over the alphabet"""
    def __init__(self, num_chars: int, hidden_dim: int = 128):
        super().__init__()
        self.lstm = nn.LSTM(num_chars, hidden_dim, batch_first=True)
        self.out = nn.Linear(hidden_dim, num_chars)
    def forward(self, x):          # x: [B, L, V] one-hot
        h, _ = self.lstm(x)        # [B, L, H]
        return self.out(h[:, -1])  # [B, V] logits for the next char
