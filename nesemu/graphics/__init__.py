"""Picture processing unit, its registers, memories, palette and frames."""